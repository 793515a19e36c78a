"""Mutation and business-logic layer of the storefront e-commerce backend."""

__version__ = "0.1.0"
