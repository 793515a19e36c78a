#!/usr/bin/env python3
"""
Set the permissions of an existing user directly in the database.

Bootstraps the first ADMIN, who can then manage everyone else through the API.

Usage:
  python scripts/grant_permissions.py --email admin@example.com --permissions ADMIN USER
"""
from __future__ import annotations

import argparse
import sys

from storefront.domain.permissions import normalize_permissions
from storefront.repositories.sql_repository import SQLRepository
from storefront.services.auth_service import normalize_email


def main() -> None:
    ap = argparse.ArgumentParser(description="Set a user's permissions")
    ap.add_argument("--email", required=True, help="Email of an existing user")
    ap.add_argument("--permissions", nargs="+", required=True, help="Permission names (e.g. ADMIN USER)")
    args = ap.parse_args()

    repo = SQLRepository()
    email = normalize_email(args.email)
    user = repo.get_user_by_email(email)
    if not user:
        raise SystemExit(f"User '{email}' does not exist")

    permissions = normalize_permissions(args.permissions)
    repo.set_permissions(user.id, permissions)
    print("OK: permissions updated")
    print(f"  User: {email} ({user.id})")
    print(f"  Permissions: {', '.join(permissions)}")


if __name__ == "__main__":
    try:
        main()
    except Exception as exc:  # pragma: no cover - CLI usage
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)
