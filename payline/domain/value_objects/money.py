"""Money value object - pure Python, Decimal based."""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Union

Number = Union[Decimal, int, float, str]

# ISO 4217 currencies whose minor unit is not 1/100.
_MINOR_UNIT_EXPONENTS = {
    "BIF": 0, "CLP": 0, "DJF": 0, "GNF": 0, "ISK": 0, "JPY": 0, "KMF": 0,
    "KRW": 0, "PYG": 0, "RWF": 0, "UGX": 0, "UYI": 0, "VND": 0, "VUV": 0,
    "XAF": 0, "XOF": 0, "XPF": 0,
    "BHD": 3, "IQD": 3, "JOD": 3, "KWD": 3, "LYD": 3, "OMR": 3, "TND": 3,
    "CLF": 4, "UYW": 4,
}


def minor_unit_exponent(currency: str) -> int:
    """Number of decimal places of the currency's minor unit."""
    return _MINOR_UNIT_EXPONENTS.get(currency.upper(), 2)


def _to_decimal(value: Number) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if value is None or value == "":
        return Decimal("0")
    try:
        # str() keeps floats like 10.6 from turning into 10.5999...
        return Decimal(str(value))
    except InvalidOperation as e:
        raise ValueError(f"Not a monetary amount: {value!r}") from e


@dataclass(frozen=True)
class Money:
    """
    Immutable monetary value, always held at the currency's minor-unit scale.

    Rounding is HALF_UP (exact halves go away from zero) everywhere.
    CRITICAL: Always use Decimal, never float!
    """

    amount: Decimal
    currency: str

    def __post_init__(self):
        if not isinstance(self.currency, str) or len(self.currency) != 3:
            raise ValueError(
                f"Currency must be 3-letter ISO code, got: {self.currency}"
            )
        object.__setattr__(self, "currency", self.currency.upper())
        object.__setattr__(self, "amount", self._quantize(_to_decimal(self.amount)))

    @classmethod
    def of(cls, amount: Number, currency: str) -> "Money":
        """Build Money from any numeric input, rounding HALF_UP to the minor unit."""
        return cls(amount=_to_decimal(amount), currency=currency)

    @classmethod
    def of_minor(cls, minor: int, currency: str) -> "Money":
        exponent = minor_unit_exponent(currency)
        return cls(amount=Decimal(minor).scaleb(-exponent), currency=currency)

    def _quantize(self, value: Decimal) -> Decimal:
        exponent = minor_unit_exponent(self.currency)
        return value.quantize(Decimal(1).scaleb(-exponent), rounding=ROUND_HALF_UP)

    @property
    def minor_amount(self) -> int:
        """Amount in minor units (e.g. cents)."""
        exponent = minor_unit_exponent(self.currency)
        return int(self.amount.scaleb(exponent))

    def divided_by(self, divisor: Number) -> "Money":
        divisor = _to_decimal(divisor)
        if divisor == 0:
            raise ZeroDivisionError("Cannot divide Money by zero")
        return Money(amount=self.amount / divisor, currency=self.currency)

    def __add__(self, other: "Money") -> "Money":
        """Add two Money objects (must have same currency)."""
        if self.currency != other.currency:
            raise ValueError(
                f"Cannot add different currencies: {self.currency} vs {other.currency}"
            )
        return Money(amount=self.amount + other.amount, currency=self.currency)

    def __sub__(self, other: "Money") -> "Money":
        """Subtract two Money objects (must have same currency)."""
        if self.currency != other.currency:
            raise ValueError(
                f"Cannot subtract different currencies: {self.currency} vs {other.currency}"
            )
        return Money(amount=self.amount - other.amount, currency=self.currency)

    def __str__(self) -> str:
        return f"{self.amount} {self.currency}"
