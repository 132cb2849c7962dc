from .models import ReviewEvent
from .repos import store_guard
from ..domain.logic import latest_by_card


@store_guard
def list_events_for_learner(learner_id):
    return list(
        ReviewEvent.objects.filter(user_id=learner_id).order_by("reviewed_at", "id")
    )


def latest_event_per_card(learner_id):
    return latest_by_card(list_events_for_learner(learner_id))


@store_guard
def append_event(learner_id, card_id, quality, next_review_at, reviewed_at):
    """
    Insert one review event. The ledger is append-only: nothing here
    updates or deletes existing rows.
    """
    return ReviewEvent.objects.create(
        user_id=learner_id,
        card_id=card_id,
        quality=quality,
        reviewed_at=reviewed_at,
        next_review_at=next_review_at,
    )


@store_guard
def count_reviewed_since(learner_id, since) -> int:
    return ReviewEvent.objects.filter(user_id=learner_id, reviewed_at__gte=since).count()
