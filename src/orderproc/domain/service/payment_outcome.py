"""Payment outcome deciders.

There is no real gateway: whether a payment succeeds is decided by a
zero-argument callable returning COMPLETED or FAILED. The reference
behavior is a fair coin flip; tests and demos inject a fixed outcome.
"""

from __future__ import annotations

import random
from collections.abc import Callable

from orderproc.domain.model.payment import PaymentStatus

PaymentOutcomeDecider = Callable[[], PaymentStatus]

_TERMINAL = (PaymentStatus.COMPLETED, PaymentStatus.FAILED)


def random_outcome(rng: random.Random | None = None) -> PaymentOutcomeDecider:
    source = rng or random.Random()

    def decide() -> PaymentStatus:
        return source.choice(_TERMINAL)

    return decide


def fixed_outcome(status: PaymentStatus) -> PaymentOutcomeDecider:
    if status not in _TERMINAL:
        raise ValueError(f"Payment outcome must be terminal, got {status.value}")
    return lambda: status


def outcome_from_name(name: str) -> PaymentOutcomeDecider:
    """Build a decider from a settings value: random, completed or failed."""
    key = name.strip().lower()
    if key == "random":
        return random_outcome()
    if key == "completed":
        return fixed_outcome(PaymentStatus.COMPLETED)
    if key == "failed":
        return fixed_outcome(PaymentStatus.FAILED)
    raise ValueError(f"Unknown payment outcome mode: {name!r}")
