"""Typed failures raised by the service layer."""

from __future__ import annotations


class ServiceError(Exception):
    """Base class for every failure a storefront operation can raise."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class AuthenticationError(ServiceError):
    status_code = 401


class ForbiddenError(ServiceError):
    status_code = 403


class NotFoundError(ServiceError):
    status_code = 404


class InvalidCredentialsError(ServiceError):
    status_code = 401


class InvalidTokenError(ServiceError):
    status_code = 400


class ValidationError(ServiceError):
    status_code = 422


class PaymentError(ServiceError):
    status_code = 402


class StoreError(ServiceError):
    """The persistent store failed; opaque to callers."""

    status_code = 503


class MailError(ServiceError):
    status_code = 502
