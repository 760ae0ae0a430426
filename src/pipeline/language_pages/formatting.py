"""Number, date and string formatting helpers for page text.

All helpers are total: unparseable input produces a neutral value (``"0"``
for numbers, ``""`` for dates) rather than an exception, because the values
come straight from optional record attributes.
"""

from __future__ import annotations

import html
import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

import pandas as pd

_ABBREVIATIONS: list[tuple[float, str]] = [
    (1e12, "t"),
    (1e9, "b"),
    (1e6, "m"),
    (1e3, "k"),
]


def _to_decimal(value: object) -> Decimal | None:
    if value is None:
        return None
    try:
        number = Decimal(str(value).strip().replace(",", ""))
    except InvalidOperation:
        return None
    return number if number.is_finite() else None


def round_half_up(value: object, decimals: int = 0) -> Decimal:
    """Round like a spreadsheet: halves go away from zero. Bad input gives 0."""
    number = _to_decimal(value)
    if number is None:
        return Decimal(0)
    return number.quantize(Decimal(1).scaleb(-decimals), rounding=ROUND_HALF_UP)


def format_count(value: object) -> str:
    """Format a count with thousands separators.

    >>> format_count("1234567.6")
    '1,234,568'
    >>> format_count(None)
    '0'
    """
    return f"{int(round_half_up(value)):,}"


def abbreviate(value: object, decimals: int = 0) -> str:
    """Abbreviate a large count with a k/m/b/t suffix.

    >>> abbreviate(1234)
    '1k'
    >>> abbreviate(1234, decimals=1)
    '1.2k'
    >>> abbreviate(950)
    '950'
    """
    number = _to_decimal(value)
    if number is None:
        number = Decimal(0)
    magnitude = abs(number)
    for index, (threshold, suffix) in enumerate(_ABBREVIATIONS):
        if magnitude >= Decimal(threshold):
            scaled = round_half_up(number / Decimal(threshold), decimals)
            # 999.9k rounds to 1000k; promote it to the next unit.
            if abs(scaled) >= 1000 and index > 0:
                bigger, bigger_suffix = _ABBREVIATIONS[index - 1]
                scaled = round_half_up(number / Decimal(bigger), decimals)
                suffix = bigger_suffix
            return f"{scaled:.{decimals}f}{suffix}"
    return f"{round_half_up(number, decimals):.{decimals}f}"


def format_percent(fraction: object) -> str:
    """Render a 0..1 fraction as a percentage rounded to 2 decimals.

    Trailing zeros are dropped, so ``0.5`` renders as ``50``.

    >>> format_percent("0.48237")
    '48.24'
    """
    number = _to_decimal(fraction)
    if number is None:
        return "0"
    text = f"{round_half_up(number * 100, 2):.2f}"
    return text.rstrip("0").rstrip(".")


def format_currency(value: object) -> str:
    """Prefix a rounded, thousands-separated amount with ``$``."""
    return f"${format_count(value)}"


def format_date(value: object) -> str:
    """Reformat an ISO timestamp or unix seconds as ``MM/DD/YYYY``."""
    if value is None or str(value).strip() == "":
        return ""
    text = str(value).strip()
    if text.isdigit():
        timestamp = pd.to_datetime(int(text), unit="s", errors="coerce")
    else:
        timestamp = pd.to_datetime(text, errors="coerce")
    if pd.isna(timestamp):
        return ""
    return timestamp.strftime("%m/%d/%Y")


def indefinite_article(word: str) -> str:
    return "an" if word and word[0].lower() in "aeiou" else "a"


def upper_first(text: str) -> str:
    return text[:1].upper() + text[1:]


def camel_case(text: str) -> str:
    """Convert a display name to a camelCase anchor id (``Bell Labs`` -> ``bellLabs``)."""
    words = re.findall(r"[A-Z]?[a-z]+|[A-Z]+(?![a-z])|\d+", text)
    if not words:
        return ""
    return words[0].lower() + "".join(word.capitalize() for word in words[1:])


def to_comma_list(items: list[str], conjunction: str = "and") -> str:
    """Join items as ``a, b and c``."""
    if len(items) <= 1:
        return "".join(items)
    return f"{', '.join(items[:-1])} {conjunction} {items[-1]}"


def make_pretty_url_link(url: str) -> str:
    """Render an anchor whose text is the URL without scheme or ``www.``."""
    text = re.sub(r"^https?://(www\.)?", "", url).rstrip("/")
    return f'<a href="{url}">{text}</a>'


def link_many_aftertext(links: list[str]) -> str:
    """Render numbered labels followed by one ``link`` line per label."""
    labels = [f"{index}." for index in range(1, len(links) + 1)]
    link_lines = "".join(
        f"\n link {link} {label}" for link, label in zip(links, labels)
    )
    return " ".join(labels) + link_lines


def clean_and_right_shift(text: str, spaces: int = 1) -> str:
    """Drop carriage returns and indent every line after the first."""
    return text.replace("\r", "").replace("\n", "\n" + " " * spaces)


def escape_html(text: str) -> str:
    return html.escape(text, quote=True)
