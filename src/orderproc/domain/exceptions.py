"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.

Three families:
- ValidationError: the request itself is malformed.
- EntityNotFoundError: the request names something that does not exist.
- ConflictError: the request is well-formed but the current state
  cannot satisfy it (e.g. not enough stock).
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class ConflictError(DomainException):
    """The current state of an entity cannot satisfy the request."""


# --- Validation ---------------------------------------------------------------


class MissingCustomerError(ValidationError):
    pass


class EmptyOrderError(ValidationError):
    pass


class InvalidItemError(ValidationError):
    pass


class TotalMismatchError(ValidationError):
    pass


class InvalidQuantityError(ValidationError):
    pass


class InvalidStatusError(ValidationError):
    pass


class InvalidPaymentMethodError(ValidationError):
    pass


class AmountMismatchError(ValidationError):
    pass


# --- Not found ----------------------------------------------------------------


class ProductNotFoundError(EntityNotFoundError):

    def __init__(self, product_id: str) -> None:
        super().__init__(f"Product {product_id} not found in inventory")
        self.product_id = product_id


class OrderNotFoundError(EntityNotFoundError):

    def __init__(self, order_id: str) -> None:
        super().__init__(f"Order {order_id} not found")
        self.order_id = order_id


class TransactionNotFoundError(EntityNotFoundError):

    def __init__(self, transaction_id: str) -> None:
        super().__init__(f"Payment transaction {transaction_id} not found")
        self.transaction_id = transaction_id


# --- Conflicts ----------------------------------------------------------------


class InsufficientAvailableError(ConflictError):

    def __init__(self, product_id: str, requested: int, available: int) -> None:
        super().__init__(
            f"Insufficient available quantity for product {product_id} "
            f"(requested {requested}, available {available})"
        )
        self.product_id = product_id
        self.requested = requested
        self.available = available


class InsufficientReservedError(ConflictError):

    def __init__(self, product_id: str, requested: int, reserved: int) -> None:
        super().__init__(
            f"Insufficient reserved quantity to release for product {product_id} "
            f"(requested {requested}, reserved {reserved})"
        )
        self.product_id = product_id
        self.requested = requested
        self.reserved = reserved
