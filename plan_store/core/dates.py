"""
Date normalization for incoming plan documents.
Clients send creationDate as DD-MM-YYYY; it is stored as YYYY-MM-DD.
"""

import re
from datetime import date
from typing import Any, Dict

from .config import DATE_FIELD
from .errors import FieldError, MalformedInput

_DAY_MONTH_YEAR = re.compile(r"^(\d{1,2})-(\d{1,2})-(\d{4})$")


def parse_day_month_year(value: str) -> date:
    """Parse a DD-MM-YYYY string into a date.

    Raises ValueError when the text is not in that shape or names a day that
    does not exist (31-02-2024).
    """
    match = _DAY_MONTH_YEAR.match(value.strip())
    if not match:
        raise ValueError(f"expected DD-MM-YYYY, got {value!r}")
    day, month, year = (int(part) for part in match.groups())
    return date(year, month, day)


def normalize_creation_date(document: Dict[str, Any], field: str = DATE_FIELD) -> Dict[str, Any]:
    """Return a copy of the document with the date field rewritten to YYYY-MM-DD.

    Absent fields are not injected and non-string values are left for the
    schema validator to reject. Unparseable strings raise MalformedInput.
    """
    if field not in document or not isinstance(document[field], str):
        return document

    try:
        parsed = parse_day_month_year(document[field])
    except ValueError:
        raise MalformedInput(
            [FieldError(f"$.{field}", "format", f"{field} must be a valid DD-MM-YYYY date")],
            message=f"Malformed {field}",
        )

    normalized = dict(document)
    normalized[field] = parsed.isoformat()
    return normalized
