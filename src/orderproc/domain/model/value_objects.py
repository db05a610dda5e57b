"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from orderproc.domain.exceptions import ValidationError


def to_decimal(amount: str | float | int | Decimal) -> Decimal:
    """Coerce a monetary amount to Decimal without binary-float noise.

    ``to_decimal(10.5)`` is ``Decimal("10.5")``, not the exact binary
    expansion of the float. NaN and infinities are rejected.
    """
    if isinstance(amount, bool):
        raise ValidationError(f"Invalid money amount: {amount!r}")
    if isinstance(amount, Decimal):
        value = amount
    else:
        try:
            value = Decimal(str(amount).strip())
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid money amount: {amount!r}") from exc
    if not value.is_finite():
        raise ValidationError(f"Invalid money amount: {amount!r}")
    return value


def format_money(amount: Decimal) -> str:
    return f"{amount:.2f}"


@dataclass(frozen=True)
class ProductAvailability:
    """Point-in-time view of one inventory row.

    Returned by every inventory read and mutation, and the unit stored
    in the availability cache.
    """

    product_id: str
    available_quantity: int
    reserved_quantity: int

    @property
    def total_quantity(self) -> int:
        return self.available_quantity + self.reserved_quantity
