from dataclasses import dataclass
from datetime import datetime

from django.utils import timezone
import structlog

from ..data.ledger import append_event
from ..data.repos import get_card
from ..domain.enums import Quality
from ..domain.logic import effective_quality, interval_days, is_valid_quality, next_review_at
from ..domain.queue import DueQueue
from ..utils.time import to_local_iso

logger = structlog.get_logger()


@dataclass
class GradeResult:
    next_review_at: datetime
    quality: Quality
    days_added: int
    queue: DueQueue


def grade_card(learner_id, card_id, quality, now=None, queue=None) -> GradeResult:
    logger.info("review_received",
        learner_id=str(learner_id),
        card_id=str(card_id),
        quality=quality,
    )

    if not is_valid_quality(quality):
        logger.warning("quality_out_of_range",
            learner_id=str(learner_id),
            card_id=str(card_id),
            quality=quality,
        )
    applied = effective_quality(quality)

    card = get_card(learner_id, card_id)
    now = now or timezone.now()
    next_dt = next_review_at(applied, now)

    # The queue is only touched once the event is safely recorded
    event = append_event(learner_id, card.pk, int(applied), next_dt, now)

    if queue is None:
        queue = DueQueue()
    queue.remove(card.pk)

    logger.info("review_scheduled",
        learner_id=str(learner_id),
        card_id=str(card.pk),
        quality=int(applied),
        interval_days=interval_days(applied),
        next_review_utc=event.next_review_at.isoformat(),
        next_review_local=to_local_iso(event.next_review_at),
        remaining=len(queue),
    )

    return GradeResult(
        next_review_at=event.next_review_at,
        quality=applied,
        days_added=interval_days(applied),
        queue=queue,
    )
