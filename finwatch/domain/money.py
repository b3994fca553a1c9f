"""Fixed-point money type.

All monetary values are held as an integer number of cents (scale 2), so
addition and subtraction are exact. Rounding only happens on division, and
only with an explicit rounding rule.
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

CENTS = Decimal("0.01")


@dataclass(frozen=True, order=True)
class MoneyAmount:
    """Immutable currency amount stored as integer cents."""

    cents: int

    def __post_init__(self) -> None:
        if not isinstance(self.cents, int) or isinstance(self.cents, bool):
            raise TypeError(f"MoneyAmount requires integer cents, got {type(self.cents).__name__}")

    @classmethod
    def zero(cls) -> "MoneyAmount":
        return cls(0)

    @classmethod
    def from_cents(cls, cents: int) -> "MoneyAmount":
        return cls(cents)

    @classmethod
    def parse(cls, value: "str | int | Decimal") -> "MoneyAmount":
        """Parse a decimal string, integer or Decimal into a MoneyAmount.

        Args:
            value: Amount in major units, e.g. "2300.00", 2300 or Decimal("12.5").

        Returns:
            The parsed amount.

        Raises:
            TypeError: If given a float (binary floating point is never accepted).
            ValueError: If the value is not a finite decimal or has more than 2 decimal places.
        """
        if isinstance(value, float):
            raise TypeError("MoneyAmount cannot be built from a float, pass a string instead")
        if isinstance(value, bool):
            raise TypeError("MoneyAmount cannot be built from a bool")

        try:
            amount = value if isinstance(value, Decimal) else Decimal(str(value).strip())
        except InvalidOperation as e:
            raise ValueError(f"Invalid amount: {value!r}") from e

        if not amount.is_finite():
            raise ValueError(f"Invalid amount: {value!r}")

        # Trailing zeros past the cents are fine ("12.500"); other sub-cent digits are not
        cents = amount.quantize(CENTS)
        if cents != amount:
            raise ValueError(f"Amount {value!r} has more than 2 decimal places")

        return cls(int(cents.scaleb(2)))

    def to_decimal(self) -> Decimal:
        return Decimal(self.cents).scaleb(-2).quantize(CENTS)

    def __add__(self, other: "MoneyAmount") -> "MoneyAmount":
        if not isinstance(other, MoneyAmount):
            return NotImplemented
        return MoneyAmount(self.cents + other.cents)

    def __sub__(self, other: "MoneyAmount") -> "MoneyAmount":
        if not isinstance(other, MoneyAmount):
            return NotImplemented
        return MoneyAmount(self.cents - other.cents)

    def __neg__(self) -> "MoneyAmount":
        return MoneyAmount(-self.cents)

    def __bool__(self) -> bool:
        return self.cents != 0

    def is_positive(self) -> bool:
        return self.cents > 0

    def is_negative(self) -> bool:
        return self.cents < 0

    def times(self, factor: "int | Decimal") -> "MoneyAmount":
        """Multiply by a scalar, rounding half-up to whole cents."""
        if isinstance(factor, float):
            raise TypeError("Scalar factor cannot be a float")
        product = (Decimal(self.cents) * Decimal(factor)).quantize(Decimal(1), rounding=ROUND_HALF_UP)
        return MoneyAmount(int(product))

    def divide(self, divisor: "MoneyAmount | int | Decimal", scale: int, rounding: str = ROUND_HALF_UP) -> Decimal:
        """Divide with explicit output scale and rounding rule.

        Args:
            divisor: Another MoneyAmount (gives a plain ratio) or a scalar.
            scale: Number of fractional digits in the result.
            rounding: A decimal rounding constant, half-up by default.

        Returns:
            The quotient as a Decimal with exactly `scale` fractional digits.

        Raises:
            ZeroDivisionError: If the divisor is zero.
        """
        if isinstance(divisor, MoneyAmount):
            numerator = Decimal(self.cents)
            denominator = Decimal(divisor.cents)
        else:
            if isinstance(divisor, float):
                raise TypeError("Divisor cannot be a float")
            numerator = self.to_decimal()
            denominator = Decimal(divisor)

        if denominator == 0:
            raise ZeroDivisionError("MoneyAmount division by zero")

        return (numerator / denominator).quantize(Decimal(1).scaleb(-scale), rounding=rounding)

    def __str__(self) -> str:
        return f"{self.to_decimal():.2f}"

    def __repr__(self) -> str:
        return f"MoneyAmount('{self}')"
