from functools import wraps

import structlog
from django.db import DatabaseError

from accounts.models import LearnerSettings
from ..config import DEFAULT_CARDS_PER_DAY, UNKNOWN_CATEGORY
from ..exceptions import AccessDenied, CardNotFound, RepositoryUnavailable
from .models import Card, Category

logger = structlog.get_logger()


def store_guard(fn):
    """Re-raise database failures as RepositoryUnavailable."""
    @wraps(fn)
    def wrapper(*args, **kwargs):
        try:
            return fn(*args, **kwargs)
        except DatabaseError as exc:
            logger.error("repository_unavailable", operation=fn.__name__, error=str(exc))
            raise RepositoryUnavailable(f"{fn.__name__} failed: {exc}") from exc
    return wrapper


@store_guard
def list_cards(learner_id, category_id=None):
    qs = Card.objects.select_related("category").filter(user_id=learner_id)
    if category_id is not None:
        qs = qs.filter(category_id=category_id)
    return list(qs.order_by("created_at", "card_number", "id"))


@store_guard
def get_card(learner_id, card_id):
    card = Card.objects.select_related("category").filter(pk=card_id).first()
    if card is None:
        raise CardNotFound(f"card {card_id} does not exist")
    if card.user_id != learner_id:
        raise AccessDenied(f"card {card_id} belongs to another learner")
    return card


@store_guard
def list_categories(learner_id):
    return list(Category.objects.filter(user_id=learner_id).order_by("name"))


def get_category_name(card) -> str:
    """
    Best-effort category lookup for display; never raises.
    """
    if card.category_id is None:
        return UNKNOWN_CATEGORY
    try:
        return card.category.name or UNKNOWN_CATEGORY
    except (Category.DoesNotExist, DatabaseError) as exc:
        logger.warning("category_unresolved", card_id=str(card.pk), error=str(exc))
        return UNKNOWN_CATEGORY


@store_guard
def get_cards_per_day(learner_id) -> int:
    prefs = LearnerSettings.objects.filter(user_id=learner_id).first()
    if prefs is None:
        return DEFAULT_CARDS_PER_DAY
    return prefs.cards_per_day
