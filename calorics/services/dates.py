from datetime import date, datetime, timedelta
from typing import Optional, Tuple

import pytz

from calorics.core.config import settings
from calorics.services.errors import BadDateError

DATE_FORMAT = "%Y-%m-%d"


def today() -> date:
    """
    Current calendar day in the configured timezone, or the server's local day.
    """
    if settings.timezone:
        return datetime.now(pytz.timezone(settings.timezone)).date()
    return date.today()


def today_str() -> str:
    return today().strftime(DATE_FORMAT)


def normalize_date(value: Optional[str]) -> str:
    """
    Return value as YYYY-MM-DD, or today when value is empty.
    Raises BadDateError for anything else.
    """
    if value is None or not value.strip():
        return today_str()
    try:
        parsed = datetime.strptime(value.strip(), DATE_FORMAT).date()
    except ValueError:
        raise BadDateError(f"Invalid date format '{value}'. Use YYYY-MM-DD")
    return parsed.strftime(DATE_FORMAT)


def normalize_range(start: Optional[str], end: Optional[str]) -> Tuple[str, str]:
    """
    Inclusive date range; missing bounds default to the seven days ending today
    (or ending at the given end date).
    """
    end_str = normalize_date(end)
    if start is None or not start.strip():
        end_date = datetime.strptime(end_str, DATE_FORMAT).date()
        start_str = (end_date - timedelta(days=6)).strftime(DATE_FORMAT)
    else:
        start_str = normalize_date(start)

    if start_str > end_str:
        raise BadDateError("startDate must not be after endDate")
    return start_str, end_str
