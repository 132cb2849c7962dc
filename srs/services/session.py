from collections import OrderedDict
from dataclasses import dataclass

import structlog

from ..config import MAX_OPEN_SESSIONS
from ..data.repos import get_cards_per_day
from ..domain.enums import SessionState
from ..exceptions import CardNotFound, InvalidTransition, RepositoryUnavailable, Unauthenticated
from .due import compute_today_queue
from .reviews import grade_card

logger = structlog.get_logger()


@dataclass(frozen=True)
class SessionSettings:
    cards_per_day: int


class SchedulingSession:
    """
    One learner's review sitting.

    Holds the learner identity, their settings and today's queue, and
    walks the presentation through reveal -> grade -> next card:

        CLOSED -> PENDING -> AWAITING_REVEAL <-> ANSWER_SHOWN
                                  |                  |
                                  +---> COMPLETE <---+

    PENDING means the identity is known but the queue has not been
    computed yet; the first `ensure_loaded()` or `restart()` computes it.
    A failed queue computation leaves the session in ERROR with no queue.
    A failed grade keeps ANSWER_SHOWN so the same card can be graded again.
    """

    def __init__(self):
        self.learner_id = None
        self.state = SessionState.CLOSED
        self.queue = None
        self.error = None
        self.total = 0
        self.completed = 0
        self._settings = None

    @property
    def is_open(self) -> bool:
        return self.state != SessionState.CLOSED

    @property
    def current(self):
        """(card, kind) of the card on screen, or None."""
        if self.queue is None or self.state not in (
            SessionState.AWAITING_REVEAL,
            SessionState.ANSWER_SHOWN,
        ):
            return None
        return self.queue.peek()

    # Lifecycle

    def open(self, learner_id, now=None, load=True):
        if learner_id is None:
            raise Unauthenticated("cannot open a session without a learner")
        if self.is_open:
            self.close()

        self.learner_id = learner_id
        self.state = SessionState.PENDING
        logger.info("session_opened", learner_id=str(learner_id))
        if load:
            self.restart(now)
        return self

    def close(self):
        if self.learner_id is not None:
            logger.info("session_closed",
                learner_id=str(self.learner_id),
                completed=self.completed,
                total=self.total,
            )
        self.learner_id = None
        self.state = SessionState.CLOSED
        self.queue = None
        self.error = None
        self.total = 0
        self.completed = 0
        self._settings = None

    def on_session_established(self, learner_id):
        # A fresh sign-in always starts from a recomputed queue
        self.open(learner_id, load=False)

    def on_session_invalidated(self):
        self.close()

    # Settings

    def load_settings(self) -> SessionSettings:
        if self._settings is None:
            self._settings = SessionSettings(
                cards_per_day=get_cards_per_day(self.learner_id)
            )
        return self._settings

    def forget_settings(self):
        self._settings = None

    # Queue

    def ensure_loaded(self, now=None):
        self._require_open()
        if self.state == SessionState.PENDING:
            self.restart(now)
        return self

    def restart(self, now=None):
        """Recompute today's queue and reset progress."""
        self._require_open()
        try:
            prefs = self.load_settings()
            queue = compute_today_queue(self.learner_id, now, prefs.cards_per_day)
        except RepositoryUnavailable as exc:
            self.queue = None
            self.error = exc
            self.total = 0
            self.completed = 0
            self.state = SessionState.ERROR
            logger.error("session_load_failed", learner_id=str(self.learner_id), error=str(exc))
            raise

        self.queue = queue
        self.error = None
        self.total = len(queue)
        self.completed = 0
        self.state = SessionState.COMPLETE if queue.is_empty else SessionState.AWAITING_REVEAL
        return queue

    # Presentation

    def reveal(self):
        self._require_state(SessionState.AWAITING_REVEAL)
        self.state = SessionState.ANSWER_SHOWN
        return self.current

    def grade(self, quality, now=None):
        self._require_state(SessionState.ANSWER_SHOWN)
        card, _ = self.current
        try:
            result = grade_card(self.learner_id, card.pk, quality, now=now, queue=self.queue)
        except RepositoryUnavailable as exc:
            self.error = exc
            logger.error("session_grade_failed",
                learner_id=str(self.learner_id),
                card_id=str(card.pk),
                error=str(exc),
            )
            raise
        except CardNotFound:
            # Deleted since the queue was built; nothing left to grade
            self.queue.remove(card.pk)
            self.total -= 1
            self._advance()
            raise

        self.error = None
        self.completed += 1
        self._advance()
        return result

    def _advance(self):
        self.state = SessionState.COMPLETE if self.queue.is_empty else SessionState.AWAITING_REVEAL

    def _require_open(self):
        if not self.is_open:
            raise Unauthenticated("review session is closed")

    def _require_state(self, expected):
        self._require_open()
        if self.state != expected:
            raise InvalidTransition(
                f"expected session state {expected.value}, got {self.state.value}"
            )


class SessionRegistry:
    """
    Open sessions keyed by learner id; one per learner.

    At most `max_sessions` are kept. Beyond that the least recently used
    session is closed and dropped; that learner gets a recomputed queue on
    their next request.
    """

    def __init__(self, max_sessions=MAX_OPEN_SESSIONS):
        self.max_sessions = max_sessions
        self._sessions = OrderedDict()

    def __len__(self):
        return len(self._sessions)

    def get(self, learner_id):
        session = self._sessions.get(learner_id)
        if session is not None:
            self._sessions.move_to_end(learner_id)
        return session

    def establish(self, learner_id):
        session = self._sessions.get(learner_id)
        if session is None:
            session = SchedulingSession()
            self._sessions[learner_id] = session
        self._sessions.move_to_end(learner_id)
        session.on_session_established(learner_id)
        self._evict()
        return session

    def _evict(self):
        while len(self._sessions) > self.max_sessions:
            learner_id, session = self._sessions.popitem(last=False)
            logger.info("session_evicted", learner_id=str(learner_id))
            session.on_session_invalidated()

    def invalidate(self, learner_id):
        session = self._sessions.pop(learner_id, None)
        if session is not None:
            session.on_session_invalidated()

    def clear(self):
        for learner_id in list(self._sessions):
            self.invalidate(learner_id)


sessions = SessionRegistry()
