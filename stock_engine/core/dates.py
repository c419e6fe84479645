from datetime import date, datetime, time, timedelta, timezone


def normalize_date(value):
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        value_text = value.strip()
        if not value_text:
            return None
        try:
            return date.fromisoformat(value_text)
        except ValueError:
            return None
    return None


def utc_now():
    return datetime.now(timezone.utc)


def day_bounds(value):
    """Start (inclusive) and end (exclusive) UTC datetimes for a calendar day."""
    day = normalize_date(value)
    if day is None:
        return None, None
    start = datetime.combine(day, time.min, tzinfo=timezone.utc)
    return start, start + timedelta(days=1)
