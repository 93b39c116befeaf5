"""
Parameter pipes

Single-argument converters for Controller.param() and friends. Each one
returns None when the value cannot be converted, which makes the caller
fall back to its default.
"""
import json
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Callable, List, Optional, Union

FALSY_WORDS = {'false', 'no', 'n', 'not', 'invalid', 'incorrect', '0', ''}

DATE_FORMAT = '%m-%d-%Y'
DATETIME_FORMAT = '%m-%d-%Y %H:%M:%S'
TIMESTAMP_FORMAT = '%Y-%m-%d %H:%M:%S'

# Tried in order by strtotime() after ISO 8601
STRTOTIME_FORMATS = (
    '%Y-%m-%d %H:%M:%S',
    '%Y-%m-%d',
    DATETIME_FORMAT,
    DATE_FORMAT,
    '%m/%d/%Y %H:%M:%S',
    '%m/%d/%Y',
    '%d %B %Y',
    '%d %b %Y',
)

Number = Union[str, int, float]


def intval(value: Number) -> Optional[int]:
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        pass
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        return None


def floatval(value: Number) -> Optional[float]:
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def boolval(value: Union[str, int, float, bool]) -> bool:
    if isinstance(value, str):
        return value.strip().lower() not in FALSY_WORDS
    return bool(value)


def trim(value: str) -> str:
    return value.strip()


def explode(value: str) -> List[str]:
    return value.split(',')


def str_split(value: str) -> List[str]:
    return list(value)


def json_decode(value: str) -> Any:
    try:
        return json.loads(value)
    except (TypeError, ValueError):
        return None


# =========================================================================
# Dates
# =========================================================================

def strtotime(value: str) -> Optional[int]:
    """
    Unix timestamp for a date string, read as local time

    Accepts 'now', ISO 8601 and the STRTOTIME_FORMATS.
    """
    if not isinstance(value, str):
        return None
    text = value.strip()
    if text.lower() == 'now':
        return int(datetime.now().timestamp())

    try:
        return int(datetime.fromisoformat(text).timestamp())
    except ValueError:
        pass
    for fmt in STRTOTIME_FORMATS:
        try:
            return int(datetime.strptime(text, fmt).timestamp())
        except ValueError:
            continue
    return None


def _parse(value: str, fmt: str) -> Optional[datetime]:
    try:
        return datetime.strptime(value.strip(), fmt)
    except (AttributeError, ValueError):
        return None


def date_object(value: str) -> Optional[datetime]:
    """'12-31-2024' as a datetime at midnight"""
    return _parse(value, DATE_FORMAT)


def datetime_object(value: str) -> Optional[datetime]:
    """'12-31-2024 23:59:00' as a datetime"""
    return _parse(value, DATETIME_FORMAT)


def date(value: Number) -> Optional[str]:
    """Format a unix timestamp as 'Y-m-d H:M:S' local time"""
    try:
        return datetime.fromtimestamp(float(value)).strftime(TIMESTAMP_FORMAT)
    except (TypeError, ValueError, OverflowError, OSError):
        return None


# =========================================================================
# Rounding (half away from zero)
# =========================================================================

def _rounder(digits: int) -> Callable[[Number], Optional[float]]:
    exponent = Decimal(1).scaleb(-digits)

    def pipe(value: Number) -> Optional[float]:
        try:
            number = Decimal(str(value).strip())
            if not number.is_finite():
                return None
            return float(number.quantize(exponent, rounding=ROUND_HALF_UP))
        except (InvalidOperation, ValueError):
            return None

    pipe.__name__ = f"round{digits}"
    return pipe


round0 = _rounder(0)
round1 = _rounder(1)
round2 = _rounder(2)
round3 = _rounder(3)
round4 = _rounder(4)
