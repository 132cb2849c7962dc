from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, List, Optional, Tuple

from .enums import CardKind


@dataclass(frozen=True)
class ReviewItem:
    card: Any
    event: Any

    @property
    def due_at(self) -> datetime:
        return self.event.next_review_at


@dataclass
class DueQueue:
    """Cards to present this session: due reviews plus today's share of new cards."""

    new: List[Any] = field(default_factory=list)
    review: List[ReviewItem] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.new) + len(self.review)

    @property
    def is_empty(self) -> bool:
        return not self.new and not self.review

    def contains(self, card_id) -> bool:
        return any(c.pk == card_id for c in self.new) or any(
            item.card.pk == card_id for item in self.review
        )

    def remove(self, card_id) -> bool:
        """Drop the card from whichever list holds it. Returns True if it was queued."""
        before = len(self)
        self.new = [c for c in self.new if c.pk != card_id]
        self.review = [item for item in self.review if item.card.pk != card_id]
        return len(self) < before

    def peek(self) -> Optional[Tuple[Any, CardKind]]:
        # Reviews are presented before new cards
        if self.review:
            return self.review[0].card, CardKind.REVIEW
        if self.new:
            return self.new[0], CardKind.NEW
        return None
