from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from .errors import InvalidAmount

SCALE = 2
_QUANTUM = Decimal(1).scaleb(-SCALE)


def _quantize(value: Decimal) -> Decimal:
    try:
        quantized = value.quantize(_QUANTUM, rounding=ROUND_HALF_UP)
    except InvalidOperation as exc:
        raise InvalidAmount(f"Amount out of range: {value}") from exc
    # -0.00 would otherwise leak into str() and persisted data
    return abs(quantized) if quantized.is_zero() else quantized


def _to_decimal(value) -> Decimal:
    if isinstance(value, Money):
        return value.amount
    if isinstance(value, Decimal):
        parsed = value
    elif isinstance(value, bool):
        raise InvalidAmount(f"Invalid amount: {value!r}")
    elif isinstance(value, (int, float, str)):
        try:
            parsed = Decimal(str(value).strip())
        except InvalidOperation as exc:
            raise InvalidAmount(f"Invalid amount: {value!r}") from exc
    else:
        raise InvalidAmount(f"Invalid amount: {value!r}")
    if not parsed.is_finite():
        raise InvalidAmount(f"Amount must be finite: {value!r}")
    return parsed


@dataclass(frozen=True, order=True)
class Money:
    """Fixed-point amount with two fractional digits.

    Every value is rounded half-up (ties away from zero) on construction, so
    the scale is always exactly two and comparisons work on the stored value.
    """

    amount: Decimal

    def __post_init__(self) -> None:
        object.__setattr__(self, "amount", _quantize(_to_decimal(self.amount)))

    @classmethod
    def of(cls, value) -> Money:
        if isinstance(value, Money):
            return value
        return cls(_to_decimal(value))

    @classmethod
    def zero(cls) -> Money:
        return cls(Decimal(0))

    def __add__(self, other: object) -> Money:
        if not isinstance(other, Money):
            return NotImplemented
        return add(self, other)

    def __sub__(self, other: object) -> Money:
        if not isinstance(other, Money):
            return NotImplemented
        return subtract(self, other)

    def __mul__(self, factor: object) -> Money:
        if isinstance(factor, Money):
            return NotImplemented
        return Money(self.amount * _to_decimal(factor))

    __rmul__ = __mul__

    def is_negative(self) -> bool:
        return self.amount < 0

    def __str__(self) -> str:
        return f"{self.amount:.{SCALE}f}"


def add(a: Money, b: Money) -> Money:
    return Money(a.amount + b.amount)


def subtract(a: Money, b: Money) -> Money:
    return Money(a.amount - b.amount)


def zero() -> Money:
    return Money.zero()
