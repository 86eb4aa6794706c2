"""Built-in predicates for recordcheck.

This module provides the predicate library the default registry is seeded
with. Every predicate takes the field value first and the rule's extra
arguments after it.

Empty values (None, blank strings, empty collections) pass every predicate
except ``required`` and the equality checks, so that format rules only apply
once a field has been filled in.

Categories:
- Presence: required
- Format: pattern, email, mobile, url, ipv4, date
- Number: number, digits, integer, min, max, range
- Length: minLength, maxLength, rangeLength
- Comparison: equalTo, notEqualTo, contains, notContains, oneOf
"""

import re
from datetime import date, datetime
from typing import Any

from recordcheck.registry import PredicateRegistry
from recordcheck.types import Predicate

EMAIL_RE = re.compile(r"^[\w.+-]+@[A-Za-z\d-]+(\.[A-Za-z\d-]+)*\.[A-Za-z]{2,}$")
MOBILE_RE = re.compile(r"^1[3-9]\d{9}$")
URL_RE = re.compile(
    r"^(https?|ftp)://"
    r"(([A-Za-z\d]([A-Za-z\d-]*[A-Za-z\d])?\.)+[A-Za-z]{2,}|localhost|\d{1,3}(\.\d{1,3}){3})"
    r"(:\d+)?(/[^\s]*)?$"
)
IPV4_RE = re.compile(r"^((25[0-5]|2[0-4]\d|1\d\d|[1-9]?\d)\.){3}(25[0-5]|2[0-4]\d|1\d\d|[1-9]?\d)$")
NUMBER_RE = re.compile(r"^[-+]?\d+(\.\d+)?$")
DIGITS_RE = re.compile(r"^\d+$")
INTEGER_RE = re.compile(r"^[-+]?\d+$")


def _is_empty(value: Any) -> bool:
    """Return True if value is None, blank string, or empty collection."""
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    if isinstance(value, (list, tuple, dict, set)):
        return len(value) == 0
    return False


def _to_number(value: Any) -> float | None:
    """Convert a value to float, or None if it is not numeric."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str) and NUMBER_RE.match(value.strip()):
        return float(value)
    return None


def _matches(regex: re.Pattern[str], value: Any) -> bool:
    if _is_empty(value):
        return True
    return bool(regex.match(str(value)))


def _length(value: Any) -> int:
    if isinstance(value, (list, tuple, dict, set)):
        return len(value)
    return len(str(value))


# -----------------------------------------------------------------------------
# Presence
# -----------------------------------------------------------------------------


def required(value: Any, flag: Any = True) -> bool:
    """Fail on empty values unless the rule is switched off with a falsy flag."""
    if not flag:
        return True
    return not _is_empty(value)


# -----------------------------------------------------------------------------
# Format
# -----------------------------------------------------------------------------


def pattern(value: Any, regex: str | re.Pattern[str]) -> bool:
    """Test if the value contains a match for the regex."""
    if _is_empty(value):
        return True
    return re.search(regex, str(value)) is not None


def email(value: Any, *args: Any) -> bool:
    return _matches(EMAIL_RE, value)


def mobile(value: Any, *args: Any) -> bool:
    """Mainland China mobile number (11 digits, leading 1)."""
    return _matches(MOBILE_RE, value)


def url(value: Any, *args: Any) -> bool:
    return _matches(URL_RE, value)


def ipv4(value: Any, *args: Any) -> bool:
    return _matches(IPV4_RE, value)


def date_(value: Any, fmt: Any = "%Y-%m-%d") -> bool:
    """Test if the value is a date or a string in the given strptime format."""
    if _is_empty(value):
        return True
    if isinstance(value, (date, datetime)):
        return True
    if not isinstance(fmt, str):
        fmt = "%Y-%m-%d"
    try:
        datetime.strptime(str(value), fmt)
    except ValueError:
        return False
    return True


# -----------------------------------------------------------------------------
# Number
# -----------------------------------------------------------------------------


def number(value: Any, *args: Any) -> bool:
    if _is_empty(value):
        return True
    return _to_number(value) is not None


def digits(value: Any, *args: Any) -> bool:
    if isinstance(value, int) and not isinstance(value, bool):
        return value >= 0
    return _matches(DIGITS_RE, value)


def integer(value: Any, *args: Any) -> bool:
    if isinstance(value, int) and not isinstance(value, bool):
        return True
    return _matches(INTEGER_RE, value)


def min_(value: Any, limit: Any) -> bool:
    if _is_empty(value):
        return True
    number_value = _to_number(value)
    return number_value is not None and number_value >= float(limit)


def max_(value: Any, limit: Any) -> bool:
    if _is_empty(value):
        return True
    number_value = _to_number(value)
    return number_value is not None and number_value <= float(limit)


def range_(value: Any, low: Any, high: Any) -> bool:
    return min_(value, low) and max_(value, high)


# -----------------------------------------------------------------------------
# Length
# -----------------------------------------------------------------------------


def min_length(value: Any, limit: int) -> bool:
    if _is_empty(value):
        return True
    return _length(value) >= int(limit)


def max_length(value: Any, limit: int) -> bool:
    if _is_empty(value):
        return True
    return _length(value) <= int(limit)


def range_length(value: Any, low: int, high: int) -> bool:
    if _is_empty(value):
        return True
    return int(low) <= _length(value) <= int(high)


# -----------------------------------------------------------------------------
# Comparison
# -----------------------------------------------------------------------------


def equal_to(value: Any, other: Any) -> bool:
    return value == other


def not_equal_to(value: Any, other: Any) -> bool:
    return value != other


def contains(value: Any, part: Any) -> bool:
    if _is_empty(value):
        return True
    return str(part) in str(value)


def not_contains(value: Any, part: Any) -> bool:
    if _is_empty(value):
        return True
    return str(part) not in str(value)


def one_of(value: Any, *choices: Any) -> bool:
    if _is_empty(value):
        return True
    return value in choices


BUILTIN_PREDICATES: dict[str, Predicate] = {
    "required": required,
    "pattern": pattern,
    "email": email,
    "mobile": mobile,
    "url": url,
    "ipv4": ipv4,
    "date": date_,
    "number": number,
    "digits": digits,
    "integer": integer,
    "min": min_,
    "max": max_,
    "range": range_,
    "minLength": min_length,
    "maxLength": max_length,
    "rangeLength": range_length,
    "equalTo": equal_to,
    "notEqualTo": not_equal_to,
    "contains": contains,
    "notContains": not_contains,
    "oneOf": one_of,
}


def register_builtin_predicates(registry: PredicateRegistry) -> None:
    """Register all built-in predicates with the given registry."""
    registry.seed(BUILTIN_PREDICATES)
