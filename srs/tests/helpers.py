from datetime import datetime, timezone as dt_tz

BASE_TIME = datetime(2023, 12, 1, tzinfo=dt_tz.utc)


def utc(*args):
    return datetime(*args, tzinfo=dt_tz.utc)
