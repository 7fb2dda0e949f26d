"""Integer arithmetic utilities for FAAB amounts.

All stakes, payouts and balances are int hundredths of a FAAB unit
("faab cents"). No float, no Decimal.
"""


def faab_to_display(cents: int) -> str:
    """Convert faab cents to display string: 11818 -> '$118.18', -2000 -> '-$20.00'."""
    if cents < 0:
        abs_cents = -cents
        return f"-${abs_cents // 100:,}.{abs_cents % 100:02d}"
    return f"${cents // 100:,}.{cents % 100:02d}"


def validate_american_odds(odds: int) -> None:
    """American odds magnitude is never below 100 (-100 and +100 are even money)."""
    if abs(odds) < 100:
        raise ValueError(f"American odds magnitude must be >= 100, got {odds}")


def faab_to_units(cents: int) -> str:
    """Plain signed decimal for exports: 1818 -> '18.18', -2000 -> '-20.00'."""
    sign = "-" if cents < 0 else ""
    abs_cents = abs(cents)
    return f"{sign}{abs_cents // 100}.{abs_cents % 100:02d}"
