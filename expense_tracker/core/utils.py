from datetime import date, datetime, timedelta
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, getcontext, localcontext
from typing import Any, Optional

getcontext().prec = 28
CENTS = Decimal("0.01")

# Day zero of spreadsheet date serials
SERIAL_EPOCH = datetime(1899, 12, 30)

# Formats a spreadsheet or a form may hand back for a date cell
DATE_FORMATS = (
    "%Y-%m-%d",
    "%Y-%m-%d %H:%M:%S",
    "%m/%d/%Y",
    "%m/%d/%Y %H:%M:%S",
    "%d %b %Y",
)

def qround(d: Decimal) -> Decimal:
    with localcontext() as ctx:
        # Room for every digit left of the cents, quantize fails past the precision
        ctx.prec = max(ctx.prec, d.adjusted() + 3)
        return d.quantize(CENTS, rounding=ROUND_HALF_UP)

def is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())

def to_decimal(value: Any) -> Decimal:
    """Convert a cell value to a Decimal. Raises ValueError when it is not a finite number."""
    if isinstance(value, bool):
        raise ValueError(f"not a number: {value!r}")
    if isinstance(value, Decimal):
        d = value
    elif isinstance(value, (int, float)):
        d = Decimal(str(value))
    else:
        try:
            d = Decimal(str(value).strip().replace(",", ""))
        except InvalidOperation:
            raise ValueError(f"not a number: {value!r}")

    if not d.is_finite():
        raise ValueError(f"not a finite number: {value!r}")
    return d

def parse_cell_datetime(value: Any) -> Optional[datetime]:
    if is_blank(value):
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return SERIAL_EPOCH + timedelta(days=value)
        except (OverflowError, ValueError):
            return None

    text = str(value).strip()
    try:
        # fromisoformat does not accept a trailing Z before 3.11
        return datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        pass

    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None

def parse_cell_date(value: Any) -> Optional[date]:
    parsed = parse_cell_datetime(value)
    return parsed.date() if parsed else None
