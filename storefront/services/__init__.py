"""
Use cases of the storefront backend.

Each service orchestrates the repository and the external adapters (mail,
payments, token signing) and raises the typed failures from
storefront.domain.errors. Routers call these services instead of touching the
database or the session cookie directly.
"""
