"""Date-pattern translation from Moment.js tokens to CLDR/LDML patterns.

Obsidian stores daily-note formats as Moment.js patterns (``YYYY-MM-DD``).
Rendering happens with babel, which speaks the Unicode LDML dialect
(``yyyy-MM-dd``).  :func:`translate` converts one into the other.

INVARIANT: ``translate`` is total and pure. Every input string produces
an output string; nothing here raises on malformed patterns.
"""

from __future__ import annotations

from datetime import datetime

from babel.core import Locale
from babel.dates import parse_pattern

DEFAULT_PATTERN = "YYYY-MM-DD"
DEFAULT_NAMES_LOCALE = "en_US"

# Ordered (token, replacement) pairs. Families run top to bottom and each
# family is listed longest-first, so at any position the first hit is the
# longest token. Day-of-year sits ahead of day-of-month: "DD" is always
# day-of-month, "DDD"/"DDDD" are always day-of-year.
TOKEN_TABLE: tuple[tuple[str, str], ...] = (
    # year
    ("YYYY", "yyyy"),
    ("YY", "yy"),
    # month
    ("MMMM", "MMMM"),
    ("MMM", "MMM"),
    ("MM", "MM"),
    ("M", "M"),
    # day of year
    ("DDDD", "DDD"),
    ("DDD", "DDD"),
    # day of month
    ("DD", "dd"),
    ("D", "d"),
    # weekday
    ("dddd", "EEEE"),
    ("ddd", "EEE"),
    ("dd", "EEEEEE"),
    ("d", "c"),
    # hour
    ("HH", "HH"),
    ("H", "H"),
    ("hh", "hh"),
    ("h", "h"),
    # minute
    ("mm", "mm"),
    ("m", "m"),
    # second
    ("ss", "ss"),
    ("s", "s"),
    # meridiem
    ("A", "a"),
    ("a", "a"),
)

_LITERAL_OPEN = "["
_LITERAL_CLOSE = "]"
_QUOTE = "'"


def quote_literal(text: str) -> str:
    """Wrap *text* in LDML single quotes, doubling embedded quotes."""
    if not text:
        return ""
    return "'" + text.replace("'", "''") + "'"


def _match_token(pattern: str, pos: int) -> tuple[str, str] | None:
    for token, replacement in TOKEN_TABLE:
        if pattern.startswith(token, pos):
            return token, replacement
    return None


def translate(pattern: str) -> str:
    """Translate a Moment.js date pattern into an LDML pattern.

    Bracketed text (``[Week]``) is emitted as a quoted literal. An ``[``
    without a matching ``]`` is an ordinary character, and a bare ``'``
    stays a literal apostrophe. Characters that start no known token pass
    through unchanged.

    >>> translate("YYYY/MM/DD")
    'yyyy/MM/dd'
    >>> translate("[Day] DD")
    "'Day' dd"
    """
    out: list[str] = []
    pos = 0
    length = len(pattern)
    while pos < length:
        char = pattern[pos]
        if char == _LITERAL_OPEN:
            close = pattern.find(_LITERAL_CLOSE, pos + 1)
            if close != -1:
                out.append(quote_literal(pattern[pos + 1 : close]))
                pos = close + 1
                continue
        elif char == _QUOTE:
            # LDML opens a quoted run on a lone apostrophe.
            out.append(_QUOTE * 2)
            pos += 1
            continue

        hit = _match_token(pattern, pos)
        if hit is not None:
            token, replacement = hit
            out.append(replacement)
            pos += len(token)
            continue

        out.append(char)
        pos += 1
    return "".join(out)


def format_date(
    pattern: str,
    when: datetime,
    *,
    names_locale: str = DEFAULT_NAMES_LOCALE,
) -> str:
    """Render *when* using a Moment.js *pattern*.

    Numeric fields are locale-invariant; weekday and month names come from
    *names_locale*. Naive datetimes are taken as local wall-clock time.

    Raises:
        ValueError: If the translated pattern has a field babel cannot render.
        babel.core.UnknownLocaleError: If *names_locale* is not a CLDR locale.
    """
    if when.tzinfo is None:
        when = when.astimezone()
    # parse_pattern, not format_datetime: a translated pattern such as
    # "short" must not select a locale preset.
    return parse_pattern(translate(pattern)).apply(when, Locale.parse(names_locale))
