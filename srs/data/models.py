import uuid

from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.utils import timezone


class Category(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="categories"
    )
    name = models.CharField(max_length=120)
    description = models.TextField(blank=True, null=True)
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        app_label = "srs"
        ordering = ["name"]

    def __str__(self):
        return self.name


class Card(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="cards"
    )
    # Deleting a category leaves its cards uncategorised
    category = models.ForeignKey(
        Category,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="cards",
    )
    card_number = models.PositiveIntegerField(default=0)
    question = models.TextField()
    answer = models.TextField()
    image_url = models.URLField(max_length=500, blank=True, null=True)
    audio_url = models.URLField(max_length=500, blank=True, null=True)
    difficulty = models.PositiveSmallIntegerField(
        default=1, validators=[MinValueValidator(1), MaxValueValidator(5)]
    )
    created_at = models.DateTimeField(default=timezone.now)  # UTC

    class Meta:
        app_label = "srs"
        indexes = [
            models.Index(fields=["user", "created_at"], name="srs_card_user_created_idx"),
        ]

    def __str__(self):
        return f"Card #{self.card_number}: {self.question[:40]}"


class ReviewEvent(models.Model):
    """One rating of one card. Rows are only ever inserted."""

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="review_events"
    )
    card = models.ForeignKey(
        Card, on_delete=models.CASCADE, related_name="review_events"
    )
    quality = models.PositiveSmallIntegerField()
    reviewed_at = models.DateTimeField(default=timezone.now)
    next_review_at = models.DateTimeField()

    class Meta:
        app_label = "srs"
        indexes = [
            models.Index(fields=["user", "card", "reviewed_at"], name="srs_event_user_card_idx"),
            models.Index(fields=["user", "next_review_at"], name="srs_event_user_due_idx"),
        ]

    def __str__(self):
        return f"ReviewEvent(card={self.card_id}, quality={self.quality})"
