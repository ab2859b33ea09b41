"""Common value types and enums shared across all models.

Duration and cost arrive from the remote API as free text ("2 hours", "$50").
They are parsed once, when a payload is validated, into `Duration` and `Money`
and serialized back to the original text, so aggregation never re-parses
strings.
"""

import re
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, PlainSerializer

DEFAULT_DURATION_MINUTES = 60

# "2h", "2 hrs", "3 hours" - the unit must be a token, not any stray "h"
_HOUR_UNIT = re.compile(r"\d\s*h|\bh(?:rs?|ours?)?\b")
_DECIMAL = re.compile(r"\d+(?:\.\d+)?|\.\d+")
_INTEGER = re.compile(r"\d+")
# First amount in the text; "," is a thousands separator
_AMOUNT = re.compile(r"\d[\d,]*(?:\.\d+)?|\.\d+")


class Currency(str, Enum):
    """Currency detected from a cost string."""

    USD = "USD"
    EUR = "EUR"
    GBP = "GBP"
    INR = "INR"
    LKR = "LKR"
    UNKNOWN = "UNKNOWN"


class ActivityType(str, Enum):
    """Kind of itinerary entry."""

    transport = "transport"
    accommodation = "accommodation"
    activity = "activity"
    meal = "meal"
    other = "other"


class ActivityCategory(str, Enum):
    """Display category derived from activity title keywords."""

    religious_site = "Religious Site"
    museum = "Museum"
    market = "Market"
    historical_site = "Historical Site"
    park = "Park"
    restaurant = "Restaurant"
    attraction = "Attraction"


_CATEGORY_KEYWORDS: list[tuple[tuple[str, ...], ActivityCategory]] = [
    (("temple", "church", "mosque"), ActivityCategory.religious_site),
    (("museum", "gallery"), ActivityCategory.museum),
    (("market", "bazaar"), ActivityCategory.market),
    (("fort", "palace", "castle"), ActivityCategory.historical_site),
    (("park", "garden"), ActivityCategory.park),
    (("restaurant", "food"), ActivityCategory.restaurant),
]

_CURRENCY_MARKERS: list[tuple[re.Pattern[str], Currency]] = [
    (re.compile(r"₹|\binr\b"), Currency.INR),
    (re.compile(r"\b(?:lkr|rs)\b"), Currency.LKR),
    (re.compile(r"€|\beur\b"), Currency.EUR),
    (re.compile(r"£|\bgbp\b"), Currency.GBP),
    (re.compile(r"\$|\busd\b"), Currency.USD),
]


def parse_duration_minutes(text: str) -> int:
    """Parse a free-text duration into minutes.

    Hours take precedence over minutes and only the leading number is used,
    so "1 hr 30 min" is 60. Anything unparseable falls back to 60 minutes.

    Args:
        text: Duration as entered, e.g. "2 hr", "45 min", "half day"

    Returns:
        Duration in whole minutes
    """
    lowered = text.lower()

    if _HOUR_UNIT.search(lowered):
        match = _DECIMAL.search(lowered)
        if match:
            return round(float(match.group()) * 60)
    elif "min" in lowered:
        match = _INTEGER.search(lowered)
        if match:
            return int(match.group())

    return DEFAULT_DURATION_MINUTES


def parse_cost_amount(text: str) -> Decimal:
    """Parse the first amount out of a free-text cost string.

    Args:
        text: Cost as entered, e.g. "$50", "LKR 3,000", "Free"

    Returns:
        Amount as Decimal, 0 when no number is present
    """
    match = _AMOUNT.search(text)
    if not match:
        return Decimal(0)

    try:
        return Decimal(match.group().replace(",", ""))
    except InvalidOperation:
        return Decimal(0)


def detect_currency(text: str) -> Currency:
    """Detect the currency of a cost string from symbols and ISO codes."""
    lowered = text.lower()
    for pattern, currency in _CURRENCY_MARKERS:
        if pattern.search(lowered):
            return currency
    return Currency.UNKNOWN


def categorize_activity(title: str) -> ActivityCategory:
    """Derive a display category from keywords in an activity title."""
    lowered = title.lower()
    for keywords, category in _CATEGORY_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return category
    return ActivityCategory.attraction


class Duration(BaseModel):
    """Duration with its display text and parsed minutes."""

    model_config = ConfigDict(frozen=True)

    text: str
    minutes: int

    @classmethod
    def from_text(cls, text: str) -> "Duration":
        """Build from free text, parsing minutes once."""
        return cls(text=text, minutes=parse_duration_minutes(text))

    @classmethod
    def from_minutes(cls, minutes: int) -> "Duration":
        """Build from minutes, formatting the display text."""
        return cls(text=format_minutes(minutes), minutes=minutes)


class Money(BaseModel):
    """Monetary estimate with its display text and parsed amount."""

    model_config = ConfigDict(frozen=True)

    text: str
    amount: Decimal
    currency: Currency = Currency.UNKNOWN

    @classmethod
    def from_text(cls, text: str) -> "Money":
        """Build from free text, parsing amount and currency once."""
        return cls(text=text, amount=parse_cost_amount(text), currency=detect_currency(text))


def format_minutes(minutes: int) -> str:
    """Format minutes as a human string ("45 min", "2 hours", "1.5 hours")."""
    if minutes < 60:
        return f"{minutes} min"
    hours = minutes / 60
    if hours == 1:
        return "1 hour"
    return f"{hours:g} hours"


def _coerce_duration(value: Any) -> Any:
    if isinstance(value, str):
        return Duration.from_text(value)
    if isinstance(value, int | float) and not isinstance(value, bool):
        return Duration.from_minutes(max(0, int(value)))
    return value


def _coerce_money(value: Any) -> Any:
    if isinstance(value, str):
        return Money.from_text(value)
    if isinstance(value, int | float | Decimal) and not isinstance(value, bool):
        return Money.from_text(str(value))
    return value


# Wire types: free text in, free text out
DurationText = Annotated[
    Duration,
    BeforeValidator(_coerce_duration),
    PlainSerializer(lambda d: d.text, return_type=str),
]
MoneyText = Annotated[
    Money,
    BeforeValidator(_coerce_money),
    PlainSerializer(lambda m: m.text, return_type=str),
]
