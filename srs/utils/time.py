from django.utils import timezone


def start_of_day(dt):
    """Local midnight (settings.TIME_ZONE) of the day containing `dt`."""
    if timezone.is_naive(dt):
        dt = timezone.make_aware(dt)
    local = timezone.localtime(dt)
    return local.replace(hour=0, minute=0, second=0, microsecond=0)

def to_local_iso(dt_utc):
    return timezone.localtime(dt_utc).isoformat()
