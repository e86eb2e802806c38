"""
Conversions between the operator's date text and the student service's date form.

The two directions take different shapes: the service sends birth dates as a
``[year, month, day]`` sequence but accepts them back as ``YYYY-MM-DD`` text.
Display form pads the month but not the day (``9/05/2012``); this matches what
existing operators see and is kept as-is.
"""

import re
from typing import Any

from .errors import MalformedDateError

_DISPLAY_DATE = re.compile(r'^\s*([0-9]{1,2})/([0-9]{1,2})/([0-9]{1,4})\s*$')


def to_service_form(display_date: str) -> str:
    """
    Convert ``DD/MM/YYYY`` text to the ``YYYY-MM-DD`` form the service accepts.

    Calendar correctness is not checked, so ``31/02/2012`` becomes ``2012-02-31``.

    Raises:
        MalformedDateError: If the text is not three numeric parts separated by '/'
    """
    if not isinstance(display_date, str):
        raise MalformedDateError(display_date)

    match = _DISPLAY_DATE.match(display_date)
    if not match:
        raise MalformedDateError(display_date)

    day, month, year = match.groups()
    return f"{year}-{month.zfill(2)}-{day.zfill(2)}"


def to_display_form(service_date: Any) -> str:
    """
    Convert a ``[year, month, day]`` sequence to ``D/MM/YYYY`` text.

    Returns an empty string for anything that is not a sequence of three integers.
    """
    if not isinstance(service_date, (list, tuple)) or len(service_date) != 3:
        return ''
    if not all(isinstance(part, int) and not isinstance(part, bool) for part in service_date):
        return ''

    year, month, day = service_date
    return f"{day}/{str(month).zfill(2)}/{year}"


class DateFormatTranslator:
    """Injectable wrapper around the two conversion functions."""

    to_service_form = staticmethod(to_service_form)
    to_display_form = staticmethod(to_display_form)
