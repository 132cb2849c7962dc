from django.conf import settings
from django.contrib.auth.models import AbstractUser
from django.core.validators import MaxValueValidator
from django.db import models

from srs.config import DEFAULT_CARDS_PER_DAY, MAX_CARDS_PER_DAY


class User(AbstractUser):
    """
    Custom User model that extends the default Django User model.
    Each user is a learner owning their own decks and review history.
    """

    pass


class LearnerSettings(models.Model):
    """Per-learner review preferences. Missing rows mean defaults apply."""

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="learner_settings",
    )
    cards_per_day = models.PositiveIntegerField(
        default=DEFAULT_CARDS_PER_DAY,
        validators=[MaxValueValidator(MAX_CARDS_PER_DAY)],
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"LearnerSettings(user={self.user_id}, cards_per_day={self.cards_per_day})"
