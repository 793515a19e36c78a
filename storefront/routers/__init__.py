"""
FastAPI routers grouped by domain (auth, cart/checkout, items, users).

Each module exposes an APIRouter included by storefront.app. Routers only
translate HTTP to service calls; typed failures are mapped to status codes by
the exception handler registered in the app factory.
"""
