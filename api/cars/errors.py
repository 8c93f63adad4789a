"""
Car store error kinds.

Store adapters raise only these; the service layer maps each kind to an HTTP
status code.
"""

from __future__ import annotations


class CarStoreError(RuntimeError):
    pass


class CarNotFoundError(CarStoreError):
    def __init__(self, message: str = "car model not found") -> None:
        super().__init__(message)


class CarValidationError(CarStoreError):
    pass


class BadPriceError(CarValidationError):
    def __init__(self, message: str = "'price' field is invalid") -> None:
        super().__init__(message)


class BadMileageError(CarValidationError):
    def __init__(self, message: str = "'mileage' field is invalid") -> None:
        super().__init__(message)


# Store unreachable, query failed, deadline expired or a stored row is unreadable.
class StorageFailureError(CarStoreError):
    pass
