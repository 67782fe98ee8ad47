from typing import Any, Optional


class CustomBaseError(Exception):
    """Base class for all custom exceptions - controls logging behavior in @Logger.io"""

    def __init__(self, message: str, status_code: int) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class DomainError(CustomBaseError):
    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message, status_code)


class PayloadValidationError(DomainError):
    """
    Caller payload rejected before any write.

    Carries enough detail for programmatic handling: the offending field,
    a machine-readable code, the value, and for range errors the inclusive
    valid range. An upper bound of None means unbounded.
    """

    def __init__(
        self,
        message: str,
        *,
        field: str,
        code: str,
        value: Any = None,
        valid_range: Optional[tuple[int, Optional[int]]] = None,
    ) -> None:
        super().__init__(message, 400)
        self.field = field
        self.code = code
        self.value = value
        self.valid_range = valid_range

    def to_dict(self) -> dict[str, Any]:
        return {
            'field': self.field,
            'code': self.code,
            'value': self.value,
            'valid_range': list(self.valid_range) if self.valid_range else None,
        }


class NotFoundError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 404)


class ConflictError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 409)


class TransactionFailureError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 500)
