from datetime import datetime, timezone


def get_now_timestamp_ms() -> int:
    """
    Get the current timestamp in milliseconds
    """
    now = datetime.now()
    return int(round(now.timestamp() * 1000))


def get_now_iso_str() -> str:
    """
    Get the current UTC time as ISO-8601 string
    2024-05-01 00:00:00 -> "2024-05-01T00:00:00.000000+00:00"
    """
    return datetime.now(timezone.utc).isoformat()


def get_date_str_of_datetime(date_obj: datetime, date_format: str) -> str:
    """
    Convert datetime to date string
    2024-05-01 00:00:00 -> "20240501"

    @param date_obj:
    @param date_format:
    @return: date string
    """
    return date_obj.strftime(date_format)
