"""
Platform fee calculation.

A fee specification is two strings stored in the configuration store,
both in major currency units:

    PLATFORM_FEE          "5%" (percentage of the charge) or "0.50" (flat)
    PLATFORM_MINIMUM_FEE  "1.00" (minimum per ticket)

The applied fee is the larger of the computed fee and the minimum
multiplied by the number of tickets. All results are integer minor units.

Usage:
    from gateway.fees import FeeCalculator

    calculator = FeeCalculator("5%", "1.00")
    calculator.calculate(amount=10000, num_tickets=3)   # 500
    calculator.calculate(amount=1000, num_tickets=3)    # 300
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from gateway.exceptions import ConfigurationError

PERCENT_SUFFIX = "%"
MINOR_UNITS = Decimal(100)


def _parse_decimal(raw: str | None, label: str) -> Decimal:
    """Parse a configured number; blank or missing values count as zero."""
    if raw is None or not raw.strip():
        return Decimal(0)
    try:
        value = Decimal(raw.strip())
    except InvalidOperation:
        raise ConfigurationError(
            f"Invalid {label} {raw!r}",
            details={"value": raw},
        ) from None
    if not value.is_finite():
        raise ConfigurationError(f"Invalid {label} {raw!r}", details={"value": raw})
    return value


def to_minor_units(major: Decimal) -> int:
    """
    Convert an amount in major units to minor units.

    Raises:
        ArithmeticError: The amount has sub-cent precision (e.g. "0.005")
    """
    minor = major * MINOR_UNITS
    if minor != minor.to_integral_value():
        raise ArithmeticError(f"{major} cannot be expressed in whole minor units")
    return int(minor)


def format_cents(amount: int) -> str:
    """Format minor units as a major-unit string, e.g. 1234 -> "12.34"."""
    return str((Decimal(amount) / MINOR_UNITS).quantize(Decimal("0.01")))


class FeeCalculator:
    """
    Computes the platform fee of one charge.

    The specification is parsed on construction so a malformed setting
    fails before any remote call is made.

    Attributes:
        is_percentage: Whether the fee is a percentage of the charge
        fee: Percentage or flat major-unit amount
        minimum_fee: Minimum major-unit amount per ticket
    """

    def __init__(self, fee: str | None, minimum_fee: str | None):
        raw_fee = (fee or "").strip()
        self.is_percentage = raw_fee.endswith(PERCENT_SUFFIX)
        if self.is_percentage:
            raw_fee = raw_fee[: -len(PERCENT_SUFFIX)]
        self.fee = _parse_decimal(raw_fee, "platform fee")
        self.minimum_fee = _parse_decimal(minimum_fee, "platform minimum fee")

    def compute_fee(self, amount: int) -> int:
        """
        Compute the fee before the minimum floor is applied.

        Percentages are rounded half-up to the nearest minor unit. Flat
        fees do not depend on the charge amount.
        """
        if self.is_percentage:
            percentage_fee = Decimal(amount) * self.fee / MINOR_UNITS
            return int(percentage_fee.quantize(Decimal(1), rounding=ROUND_HALF_UP))
        return to_minor_units(self.fee)

    def minimum_floor(self, num_tickets: int) -> int:
        """Minimum fee for a reservation of num_tickets tickets."""
        return to_minor_units(self.minimum_fee) * num_tickets

    def calculate(self, amount: int, num_tickets: int) -> int:
        """
        Compute the applied platform fee.

        Args:
            amount: Charge amount in minor units
            num_tickets: Tickets in the reservation

        Returns:
            max(computed fee, minimum floor) in minor units

        Raises:
            ArithmeticError: A flat or minimum fee has sub-cent precision
        """
        return max(self.compute_fee(amount), self.minimum_floor(num_tickets))

    def __repr__(self) -> str:
        suffix = PERCENT_SUFFIX if self.is_percentage else ""
        return f"FeeCalculator(fee={self.fee}{suffix}, minimum_fee={self.minimum_fee})"
