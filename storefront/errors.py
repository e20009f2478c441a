# storefront/errors.py
"""
Typed failures returned by the use cases.

Every error carries a ``kind`` (stable machine-readable name) and a
``message``; the HTTP layer maps them to responses using ``status_code``.
"""


class StorefrontError(Exception):
    kind = "Error"
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"kind": self.kind, "detail": self.message}


class ValidationError(StorefrontError):
    kind = "ValidationError"


class EmptyOrder(ValidationError):
    kind = "EmptyOrder"

    def __init__(self, message: str = "No order items"):
        super().__init__(message)


class InsufficientStock(StorefrontError):
    kind = "InsufficientStock"

    def __init__(self, product_id: int, message: str | None = None):
        super().__init__(
            message
            or "One or more product order quantity exceed available quantity"
        )
        self.product_id = product_id


class DuplicateEmail(StorefrontError):
    kind = "DuplicateEmail"

    def __init__(self, message: str = "Email of user already exists"):
        super().__init__(message)


class DuplicateName(StorefrontError):
    kind = "DuplicateName"


class HasOrders(StorefrontError):
    kind = "HasOrders"


class NotFound(StorefrontError):
    kind = "NotFound"
    status_code = 404


class Unauthorized(StorefrontError):
    kind = "Unauthorized"
    status_code = 401


class Forbidden(StorefrontError):
    kind = "Forbidden"
    status_code = 403


class InternalConsistency(StorefrontError):
    """An invariant the system guarantees itself was found broken."""

    kind = "InternalConsistency"
    status_code = 500
