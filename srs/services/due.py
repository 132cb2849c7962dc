from django.utils import timezone
import structlog

from ..data.ledger import latest_event_per_card
from ..data.repos import get_cards_per_day, list_cards
from ..domain.logic import build_queue
from ..exceptions import Unauthenticated
from ..utils.time import start_of_day, to_local_iso

logger = structlog.get_logger()


def compute_today_queue(learner_id, now=None, daily_new_cap=None):
    """
    Build today's review queue for a learner.

    New cards are those never reviewed, in creation order, limited to
    `daily_new_cap` (the learner's cards_per_day when omitted). Review
    cards are those whose latest event fell due by the start of today,
    earliest due first. Repository failures propagate; no partial queue
    is ever returned.
    """
    if learner_id is None:
        raise Unauthenticated("no learner identity for queue computation")

    now = now or timezone.now()
    if daily_new_cap is None:
        daily_new_cap = get_cards_per_day(learner_id)

    cards = list_cards(learner_id)
    latest = latest_event_per_card(learner_id)
    day_start = start_of_day(now)

    queue = build_queue(cards, latest, day_start, daily_new_cap)

    logger.info("queue_computed",
        learner_id=str(learner_id),
        day_start=to_local_iso(day_start),
        card_count=len(cards),
        reviewed_count=len(latest),
        new_count=len(queue.new),
        review_count=len(queue.review),
        daily_new_cap=daily_new_cap,
    )
    return queue
