from datetime import date, datetime, timedelta, timezone


def utcnow() -> datetime:
    # naive UTC: SQLite drops tzinfo on the way back
    return datetime.now(timezone.utc).replace(tzinfo=None)


def start_of_month(moment: datetime) -> datetime:
    return moment.replace(day=1, hour=0, minute=0, second=0, microsecond=0)


def start_of_week(moment: datetime) -> datetime:
    """Неделя начинается с воскресенья"""
    days_since_sunday = (moment.weekday() + 1) % 7
    start = moment - timedelta(days=days_since_sunday)
    return start.replace(hour=0, minute=0, second=0, microsecond=0)


def trailing_window_start(today: date, days: int) -> date:
    """Первый день окна из `days` дней, заканчивающегося сегодня"""
    return today - timedelta(days=days - 1)
