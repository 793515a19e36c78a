"""
Core utilities shared across the storefront backend.

This package hosts configuration, logging setup, password hashing, session
token signing and the adapters for outbound mail and payments.
"""
