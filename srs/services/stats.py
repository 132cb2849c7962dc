from dataclasses import dataclass

from django.utils import timezone

from ..data.ledger import count_reviewed_since, latest_event_per_card
from ..data.repos import list_cards, list_categories
from ..exceptions import Unauthenticated
from ..utils.time import start_of_day


@dataclass
class ReviewStats:
    categories: int
    cards: int
    reviews_due: int
    reviews_completed_today: int


def review_stats(learner_id, now=None) -> ReviewStats:
    """Dashboard counters for a learner."""
    if learner_id is None:
        raise Unauthenticated("no learner identity for stats")

    now = now or timezone.now()
    day_start = start_of_day(now)
    latest = latest_event_per_card(learner_id)

    return ReviewStats(
        categories=len(list_categories(learner_id)),
        cards=len(list_cards(learner_id)),
        reviews_due=sum(1 for e in latest.values() if e.next_review_at <= day_start),
        reviews_completed_today=count_reviewed_since(learner_id, day_start),
    )
