"""
Persistence adapters.

Services depend on SQLRepository instead of opening SQLAlchemy sessions
themselves; every store failure leaves this package as a StoreError.
"""
