"""Display helpers for the what-if results page."""

from enum import Enum

from app.api.whatif.models import CoinComparison


class GainTone(str, Enum):
    GOOD = "good"
    MEH = "meh"
    BAD = "bad"


def format_usd(value: float) -> str:
    """Format as US dollars, e.g. -1234.5 -> "-$1,234.50"."""
    sign = "-" if value < 0 and round(abs(value), 2) > 0 else ""
    return f"{sign}${abs(value):,.2f}"


def format_eth(value: float) -> str:
    return f"{value:.4f} ETH"


def format_percent(value: float) -> str:
    """Up to two decimals, trailing zeros dropped, e.g. 110.0 -> "110%"."""
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return ("0" if text == "-0" else text) + "%"


def gain_tone(comparison: CoinComparison) -> GainTone:
    if comparison.eth_winner:
        return GainTone.GOOD
    if comparison.actual_gain > 0:
        return GainTone.GOOD if comparison.potential_gain > 1000 else GainTone.MEH
    return GainTone.BAD if comparison.potential_gain >= 3000 else GainTone.MEH


def gain_message(comparison: CoinComparison) -> str:
    if comparison.eth_winner:
        return "You made the right choice! 🎯"
    if comparison.actual_gain > 0:
        return f"You could have made an extra {format_usd(comparison.potential_gain)}!"
    return f"You could have saved {format_usd(abs(comparison.potential_gain))}"
