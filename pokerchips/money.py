from __future__ import annotations


def currency_string(chip_count: int, chip_value_cents: int) -> str:
    """Render a chip count as dollars, e.g. ``12 chips @ 25c -> "$3.00"``."""
    total_cents = chip_count * chip_value_cents
    sign = "-" if total_cents < 0 else ""
    dollars, cents = divmod(abs(total_cents), 100)
    return f"{sign}${dollars}.{cents:02d}"
