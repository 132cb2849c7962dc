from datetime import datetime, timedelta
from typing import Dict, Iterable

from .enums import Quality
from .queue import DueQueue, ReviewItem
from ..config import FALLBACK_QUALITY, INTERVAL_DAYS


def is_valid_quality(quality) -> bool:
    return isinstance(quality, int) and not isinstance(quality, bool) and quality in INTERVAL_DAYS


def effective_quality(quality) -> Quality:
    # Out-of-range ratings are scheduled as the hardest one
    if is_valid_quality(quality):
        return Quality(quality)
    return Quality(FALLBACK_QUALITY)


def interval_days(quality) -> int:
    return INTERVAL_DAYS[effective_quality(quality)]


def next_review_at(quality, now: datetime) -> datetime:
    return now + timedelta(days=interval_days(quality))


def latest_by_card(events: Iterable) -> Dict:
    """
    Keep the most recent event per card.

    "Most recent" is the greatest (reviewed_at, id) pair, so two events
    with the same timestamp resolve to the one inserted last.
    """
    latest: Dict = {}
    for event in events:
        current = latest.get(event.card_id)
        if current is None or (event.reviewed_at, event.pk) > (current.reviewed_at, current.pk):
            latest[event.card_id] = event
    return latest


def build_queue(cards: Iterable, latest: Dict, day_start: datetime, daily_new_cap: int) -> DueQueue:
    """
    Split cards into never-reviewed (new) and due (review).

    `cards` must already be in creation order. A review is due when its
    latest next_review_at is at or before `day_start`.
    """
    new_cards = []
    review_items = []
    for card in cards:
        event = latest.get(card.pk)
        if event is None:
            new_cards.append(card)
        elif event.next_review_at <= day_start:
            review_items.append(ReviewItem(card=card, event=event))

    review_items.sort(key=lambda item: (item.event.next_review_at, item.event.reviewed_at, item.event.pk))

    cap = max(0, daily_new_cap or 0)
    return DueQueue(new=new_cards[:cap], review=review_items)
