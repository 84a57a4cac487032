"""
Text field parsing for fare pages.

Every parser here is total: missing or malformed input comes back as a
sentinel value ("N/A", None or infinity), never as an exception, so the
extractors can stay free of error handling for ordinary markup drift.
"""

import math
import re
from typing import Optional, Tuple

from farewatch.scrapers.records import Money, NOT_AVAILABLE, UNKNOWN_PRICE

AMOUNT_RUN = re.compile(r'[\d,.]+')
SYMBOL_RUN = re.compile(r'[^\d\s,.]+')

TIME_OF_DAY_PATTERN = re.compile(r'\b([01]?\d|2[0-3]):([0-5]\d)\b')
IATA_CODE_PATTERN = re.compile(r'\b([A-Z]{3})\b')

# Duration parsing patterns, most specific first
DURATION_PATTERNS = [
    (re.compile(r'(\d+)\s*h(?:r|our)?s?\s*(\d+)\s*m', re.I), "hours and minutes"),
    (re.compile(r'(\d+)\s*h(?:r|our)?s?(?!\s*\d)', re.I), "hours only"),
    (re.compile(r'(\d+)\s*m(?:in(?:ute)?s?)?\b', re.I), "minutes only"),
    (re.compile(r'(\d{1,2}):(\d{2})'), "HH:MM format"),
]


def _longest(pattern: re.Pattern, text: str) -> str:
    """Longest match of pattern in text; the first one wins a tie."""
    best = ""
    for match in pattern.finditer(text):
        if len(match.group(0)) > len(best):
            best = match.group(0)
    return best


def parse_money(text: Optional[str]) -> Money:
    """
    Split a price blob such as "€1,234.50" or "45 Ft" into amount and symbol.

    The amount is the longest run of digits, commas and periods; the symbol is
    the longest run of anything that is not a digit, whitespace, comma or
    period. Either may be missing.

    Empty text and the literal "N/A" skip the symbol scan and give the
    placeholder with an empty symbol, so "N/A" is never read as a currency.
    """
    raw = (text or "").strip()
    if not raw or raw == NOT_AVAILABLE:
        return UNKNOWN_PRICE

    amount = _longest(AMOUNT_RUN, raw) or NOT_AVAILABLE
    symbol = _longest(SYMBOL_RUN, raw)
    return Money(amount=amount, currency_symbol=symbol, raw=raw)


def to_numeric(money: Money) -> float:
    """Numeric value of a price; +inf when there is nothing to compare."""
    if not money.is_available:
        return math.inf
    try:
        value = float(money.amount.replace(",", ""))
    except ValueError:
        return math.inf
    if math.isnan(value):
        return math.inf
    return value


def parse_time_of_day(text: Optional[str]) -> Optional[str]:
    """Return the first clock time in text as HH:MM."""
    if not text:
        return None
    match = TIME_OF_DAY_PATTERN.search(text)
    if not match:
        return None
    return f"{int(match.group(1)):02d}:{match.group(2)}"


def parse_duration_minutes(text: Optional[str]) -> Optional[int]:
    """Parse duration text ("2h 25m", "2 hrs", "45 min", "02:25") to minutes."""
    if not text:
        return None

    for pattern, pattern_name in DURATION_PATTERNS:
        match = pattern.search(text)
        if not match:
            continue
        if pattern_name == "hours and minutes":
            return int(match.group(1)) * 60 + int(match.group(2))
        if pattern_name == "hours only":
            return int(match.group(1)) * 60
        if pattern_name == "minutes only":
            return int(match.group(1))
        hours, mins = int(match.group(1)), int(match.group(2))
        if hours < 48 and mins < 60:  # Sanity check
            return hours * 60 + mins

    return None


def parse_route_codes(text: Optional[str]) -> Optional[Tuple[str, str]]:
    """Pull (origin, destination) IATA codes out of a route header like "BUD - MAN"."""
    if not text:
        return None
    codes = IATA_CODE_PATTERN.findall(text)
    if len(codes) < 2:
        return None
    return codes[0], codes[1]
