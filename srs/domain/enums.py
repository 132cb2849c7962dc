from enum import Enum, IntEnum

class Quality(IntEnum):
    AGAIN = 1
    HARD = 2
    GOOD = 3
    EASY = 4
    VERY_EASY = 5

QUALITY_LABELS = {
    Quality.AGAIN: "Again",
    Quality.HARD: "Hard",
    Quality.GOOD: "Good",
    Quality.EASY: "Easy",
    Quality.VERY_EASY: "Very Easy",
}

class CardKind(str, Enum):
    NEW = "new"
    REVIEW = "review"

class SessionState(str, Enum):
    CLOSED = "closed"
    PENDING = "pending"
    AWAITING_REVEAL = "awaiting_reveal"
    ANSWER_SHOWN = "answer_shown"
    COMPLETE = "complete"
    ERROR = "error"
