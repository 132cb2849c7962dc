import itertools
from datetime import timedelta

import pytest

from srs.data.models import Card, Category, ReviewEvent
from srs.domain.logic import next_review_at
from srs.services.session import sessions

from .helpers import BASE_TIME


@pytest.fixture(autouse=True)
def utc_day_boundary(settings):
    settings.TIME_ZONE = "UTC"


@pytest.fixture(autouse=True)
def fresh_sessions():
    sessions.clear()
    yield
    sessions.clear()


@pytest.fixture
def learner(django_user_model):
    return django_user_model.objects.create_user(username="learner")


@pytest.fixture
def other_learner(django_user_model):
    return django_user_model.objects.create_user(username="someone-else")


@pytest.fixture
def category(learner):
    return Category.objects.create(user=learner, name="Spanish")


@pytest.fixture
def make_card(learner):
    counter = itertools.count(1)

    def _make(user=None, category=None, created_at=None, **fields):
        n = next(counter)
        return Card.objects.create(
            user=user or learner,
            category=category,
            card_number=n,
            question=fields.pop("question", f"Question {n}"),
            answer=fields.pop("answer", f"Answer {n}"),
            created_at=created_at or BASE_TIME + timedelta(minutes=n),
            **fields,
        )

    return _make


@pytest.fixture
def make_event(learner):
    def _make(card, quality, reviewed_at, next_due=None, user=None):
        return ReviewEvent.objects.create(
            user=user or learner,
            card=card,
            quality=quality,
            reviewed_at=reviewed_at,
            next_review_at=next_due or next_review_at(quality, reviewed_at),
        )

    return _make
