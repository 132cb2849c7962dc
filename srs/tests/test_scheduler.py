import pytest
import logging
from unittest import mock
from django.test import Client
from django.urls import reverse
from django.utils import timezone
from datetime import timedelta

from srs.data.models import ReviewEvent
from srs.exceptions import RepositoryUnavailable
from srs.services.session import sessions

from .helpers import utc

logger = logging.getLogger(__name__)

# Helpers

def api_get(client, name, user, **params):
    resp = client.get(reverse(name), params, HTTP_X_USER_NAME=user.username)
    logger.info("GET %s → status=%s", name, resp.status_code)
    return resp


def api_post(client, name, user, payload=None):
    resp = client.post(
        reverse(name),
        data=payload or {},
        content_type="application/json",
        HTTP_X_USER_NAME=user.username,
    )
    logger.info("POST %s → status=%s", name, resp.status_code)
    return resp


def grade(client, user, quality):
    api_post(client, "review-reveal", user)
    resp = api_post(client, "review-grade", user, {"quality": quality})
    data = resp.json()
    logger.info(
        "graded quality=%s (%s) → status=%s days=%s",
        quality,
        data.get("quality_label"),
        resp.status_code,
        data.get("days_added"),
    )
    return resp


# Tests

@pytest.mark.django_db
def test_unauthenticated_queue_is_refused(client):
    resp = client.get(reverse("review-today"))

    assert resp.status_code == 401
    assert resp.json() == {"error": "User not authenticated", "type": "Unauthenticated"}


@pytest.mark.django_db
def test_today_queue_lists_new_cards_in_creation_order(client, learner, make_card):
    cards = [make_card() for _ in range(3)]

    data = api_get(client, "review-today", learner).json()

    assert data["new_count"] == 3
    assert data["review_count"] == 0
    assert [c["id"] for c in data["new"]] == [str(c.pk) for c in cards]
    assert data["new"][0]["category_name"] == "Unknown"
    logger.info("✓ Passed: new cards listed in creation order")


@pytest.mark.django_db
def test_today_queue_honours_cap_and_date(client, learner, make_card, make_event):
    due = make_card()
    for _ in range(4):
        make_card()
    make_event(due, 3, utc(2024, 1, 1))  # due 2024-01-08

    early = api_get(client, "review-today", learner, at="2024-01-05T12:00:00Z", cap=2).json()
    assert early["review_count"] == 0
    assert early["new_count"] == 2

    on_time = api_get(client, "review-today", learner, at="2024-01-08T12:00:00Z", cap=2).json()
    assert on_time["review_count"] == 1
    assert on_time["review"][0]["card"]["id"] == str(due.pk)
    assert on_time["review"][0]["last_quality"] == 3
    logger.info("✓ Passed: cap and due date respected")


@pytest.mark.django_db
def test_session_walkthrough(client, learner, make_card):
    first, second = make_card(), make_card()

    snap = api_get(client, "review-session", learner).json()
    assert snap["state"] == "awaiting_reveal"
    assert snap["current_card"]["id"] == str(first.pk)
    assert snap["current_card"]["answer"] is None
    assert snap["show_answer"] is False
    assert (snap["completed"], snap["total"]) == (0, 2)

    revealed = api_post(client, "review-reveal", learner).json()
    assert revealed["state"] == "answer_shown"
    assert revealed["current_card"]["answer"] == first.answer

    before = timezone.now()
    resp = api_post(client, "review-grade", learner, {"quality": 3})
    data = resp.json()
    assert resp.status_code == 201
    assert data["days_added"] == 7
    assert data["quality_label"] == "Good"
    assert data["session"]["current_card"]["id"] == str(second.pk)
    assert data["session"]["completed"] == 1

    event = ReviewEvent.objects.get(card=first)
    assert event.next_review_at - event.reviewed_at == timedelta(days=7)
    assert event.reviewed_at >= before

    data = grade(client, learner, 5).json()
    assert data["session"]["state"] == "complete"
    assert data["session"]["current_card"] is None
    assert data["session"]["remaining"] == 0
    logger.info("✓ Passed: session walked to completion")


@pytest.mark.django_db
def test_grade_before_reveal_conflicts(client, learner, make_card):
    make_card()

    resp = api_post(client, "review-grade", learner, {"quality": 3})

    assert resp.status_code == 409
    assert resp.json()["type"] == "InvalidTransition"
    assert ReviewEvent.objects.count() == 0


@pytest.mark.django_db
def test_out_of_range_quality_is_scheduled_as_again(client, learner, make_card):
    make_card()

    resp = grade(client, learner, 9)
    data = resp.json()

    assert resp.status_code == 201
    assert data["quality"] == 1
    assert data["quality_label"] == "Again"
    assert data["days_added"] == 1
    logger.info("✓ Passed: quality=9 treated as 1")


@pytest.mark.django_db
def test_non_integer_quality_is_a_bad_request(client, learner, make_card):
    make_card()
    api_post(client, "review-reveal", learner)

    resp = api_post(client, "review-grade", learner, {"quality": "great"})

    assert resp.status_code == 400


@pytest.mark.django_db
def test_ledger_failure_keeps_card_on_screen(client, learner, make_card):
    card = make_card()
    api_post(client, "review-reveal", learner)

    with mock.patch(
        "srs.services.reviews.append_event",
        side_effect=RepositoryUnavailable("ledger offline"),
    ):
        resp = api_post(client, "review-grade", learner, {"quality": 4})

    assert resp.status_code == 503
    assert resp.json()["type"] == "RepositoryUnavailable"

    snap = api_get(client, "review-session", learner).json()
    assert snap["state"] == "answer_shown"
    assert snap["current_card"]["id"] == str(card.pk)
    assert snap["error"] == "ledger offline"
    logger.info("✓ Passed: failed write leaves card presentable")


@pytest.mark.django_db
def test_restart_recomputes_queue(client, learner, make_card):
    make_card()
    grade(client, learner, 1)
    assert api_get(client, "review-session", learner).json()["state"] == "complete"

    make_card()
    snap = api_post(client, "review-restart", learner).json()

    assert snap["state"] == "awaiting_reveal"
    assert (snap["completed"], snap["total"]) == (0, 1)


@pytest.mark.django_db
def test_logout_invalidates_session(client, learner, make_card):
    make_card()
    api_get(client, "review-session", learner)
    assert sessions.get(learner.pk) is not None

    resp = api_post(client, "user-logout", learner)

    assert resp.status_code == 204
    assert sessions.get(learner.pk) is None


@pytest.mark.django_db
def test_switching_learner_and_back_recomputes_queue(client, learner, other_learner, make_card):
    make_card()
    assert api_get(client, "review-session", learner).json()["total"] == 1

    api_get(client, "review-session", other_learner)
    # The previous learner was signed out by the switch
    assert sessions.get(learner.pk) is None

    make_card()
    snap = api_get(client, "review-session", learner).json()

    assert snap["state"] == "awaiting_reveal"
    assert (snap["completed"], snap["total"]) == (0, 2)
    logger.info("✓ Passed: returning learner sees %s cards", snap["total"])


@pytest.mark.django_db
def test_second_sign_in_recomputes_queue(client, learner, make_card):
    make_card()
    assert api_get(client, "review-session", learner).json()["total"] == 1

    make_card()
    # A new client has no session cookie, so this is a fresh sign-in
    snap = api_get(Client(), "review-session", learner).json()

    assert (snap["completed"], snap["total"]) == (0, 2)


@pytest.mark.django_db
def test_cards_listing_filters_by_category(client, learner, other_learner, make_card, category):
    make_card()
    filed = make_card(category=category)
    make_card(user=other_learner)

    everything = api_get(client, "cards", learner).json()["cards"]
    spanish = api_get(client, "cards", learner, category=str(category.pk)).json()["cards"]

    assert len(everything) == 2
    assert [c["id"] for c in spanish] == [str(filed.pk)]
    assert spanish[0]["category_name"] == "Spanish"


@pytest.mark.django_db
def test_stats_counts(client, learner, make_card, make_event, category):
    old = make_card(category=category)
    make_card()
    make_event(old, 1, timezone.now() - timedelta(days=10))

    grade(client, learner, 2)  # the overdue review card comes first

    stats = api_get(client, "review-stats", learner).json()

    assert stats == {
        "categories": 1,
        "cards": 2,
        "reviews_due": 0,
        "reviews_completed_today": 1,
    }


@pytest.mark.django_db
def test_session_endpoints_log_their_responses(client, learner, make_card):
    make_card()

    with mock.patch("srs.api.views.base_logger") as base_logger:
        api_get(client, "review-session", learner)
        api_post(client, "review-reveal", learner)
        api_post(client, "review-restart", learner)
        api_get(client, "review-stats", learner)

    request_logger = base_logger.bind.return_value
    events = [c.args[0] for c in request_logger.info.call_args_list]
    assert events == [
        "session_api_response",
        "reveal_api_response",
        "restart_api_response",
        "stats_api_response",
    ]
    assert request_logger.info.call_args_list[1].kwargs["state"] == "answer_shown"
    assert request_logger.info.call_args_list[3].kwargs["cards"] == 1
