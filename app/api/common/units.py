"""Conversions between JSON-RPC quantities, wei and ether."""

from decimal import Decimal

WEI_PER_ETHER = 10**18


def parse_quantity(value: str | int | None) -> int | None:
    """Parse a JSON-RPC quantity ("0x1b4") or decimal string into an int.

    Returns None for empty or malformed values.
    """
    match value:
        case None:
            return None
        case bool():
            return None
        case int():
            return value
        case str():
            value = value.strip()
            if not value:
                return None
            try:
                base = 16 if value.startswith(("0x", "0X")) else 10
                return int(value, base)
            except ValueError:
                return None
        case _:
            return None


def to_quantity(value: int) -> str:
    if value < 0:
        raise ValueError("Cannot encode a negative quantity")
    return hex(value)


def format_ether(wei: int) -> Decimal:
    """Exact wei to ether conversion."""
    return Decimal(wei) / Decimal(WEI_PER_ETHER)
