"""Application service: Process Payment / Payment Status use cases.

A payment attempt that passes validation is always recorded, whatever
its outcome. A FAILED outcome is not an error: it is reported through
``PaymentResult.is_success``.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from datetime import datetime

from orderproc.application.dto import PaymentDTO, PaymentResult, payment_to_dto
from orderproc.domain.exceptions import (
    AmountMismatchError,
    InvalidPaymentMethodError,
    OrderNotFoundError,
    TransactionNotFoundError,
)
from orderproc.domain.model.order import utc_now
from orderproc.domain.model.payment import PaymentTransaction
from orderproc.domain.model.value_objects import to_decimal
from orderproc.domain.repository.order_repository import OrderRepository
from orderproc.domain.repository.payment_repository import PaymentRepository
from orderproc.domain.service.payment_outcome import PaymentOutcomeDecider
from orderproc.logging_config import observed

DEFAULT_PAYMENT_METHODS = ("CreditCard", "PayPal")


class ProcessPaymentHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        payment_repo: PaymentRepository,
        decide_outcome: PaymentOutcomeDecider,
        allowed_methods: Iterable[str] = DEFAULT_PAYMENT_METHODS,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._order_repo = order_repo
        self._payment_repo = payment_repo
        self._decide_outcome = decide_outcome
        # lower-cased name -> canonical spelling
        self._methods = {m.lower(): m for m in allowed_methods}
        self._clock = clock

    @observed("process_payment")
    def handle(
        self, order_id: str, amount: str | int | float, method: str
    ) -> PaymentResult:
        canonical_method = self._methods.get((method or "").strip().lower())
        if canonical_method is None:
            raise InvalidPaymentMethodError(
                f"Payment method {method!r} is not accepted "
                f"(allowed: {', '.join(self._methods.values())})"
            )

        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)

        paid = to_decimal(amount)
        if paid != order.total_amount:
            raise AmountMismatchError(
                f"Payment amount ({paid}) does not match "
                f"the order total ({order.total_amount})"
            )

        transaction = PaymentTransaction(
            transaction_id=self._payment_repo.next_id(),
            order_id=order_id,
            amount=paid,
            method=canonical_method,
            status=self._decide_outcome(),
            processed_at=self._clock(),
        )
        self._payment_repo.add(transaction)

        return PaymentResult(
            transaction=payment_to_dto(transaction),
            is_success=transaction.is_success,
        )


class GetPaymentStatusHandler:

    def __init__(self, payment_repo: PaymentRepository) -> None:
        self._payment_repo = payment_repo

    @observed("get_payment_status")
    def handle(self, transaction_id: str) -> PaymentDTO:
        transaction = self._payment_repo.get_by_id(transaction_id)
        if transaction is None:
            raise TransactionNotFoundError(transaction_id)
        return payment_to_dto(transaction)
