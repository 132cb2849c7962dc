from rest_framework import serializers

from ..data.models import Card
from ..data.repos import get_category_name
from ..domain.enums import SessionState


class CardSerializer(serializers.ModelSerializer):
    category_name = serializers.SerializerMethodField()

    class Meta:
        model = Card
        fields = [
            "id", "card_number", "category", "category_name", "question", "answer",
            "image_url", "audio_url", "difficulty", "created_at",
        ]

    def get_category_name(self, card):
        return get_category_name(card)


class ReviewItemSerializer(serializers.Serializer):
    card = CardSerializer()
    due_at = serializers.DateTimeField()
    last_quality = serializers.IntegerField(source="event.quality")
    last_reviewed_at = serializers.DateTimeField(source="event.reviewed_at")


class DueQueueSerializer(serializers.Serializer):
    new = CardSerializer(many=True)
    review = ReviewItemSerializer(many=True)
    new_count = serializers.SerializerMethodField()
    review_count = serializers.SerializerMethodField()

    def get_new_count(self, queue):
        return len(queue.new)

    def get_review_count(self, queue):
        return len(queue.review)


class SessionSerializer(serializers.Serializer):
    state = serializers.CharField(source="state.value")
    current_card = serializers.SerializerMethodField()
    current_kind = serializers.SerializerMethodField()
    show_answer = serializers.SerializerMethodField()
    completed = serializers.IntegerField()
    total = serializers.IntegerField()
    remaining = serializers.SerializerMethodField()
    error = serializers.SerializerMethodField()

    def get_current_card(self, session):
        current = session.current
        if current is None:
            return None
        data = CardSerializer(current[0]).data
        # The answer stays hidden until revealed
        if not self.get_show_answer(session):
            data["answer"] = None
        return data

    def get_current_kind(self, session):
        current = session.current
        return current[1].value if current else None

    def get_show_answer(self, session):
        return session.state == SessionState.ANSWER_SHOWN

    def get_remaining(self, session):
        return len(session.queue) if session.queue is not None else 0

    def get_error(self, session):
        return str(session.error) if session.error else None


class GradeInSerializer(serializers.Serializer):
    # Out-of-range values are accepted and scheduled as quality 1
    quality = serializers.IntegerField()


class DueQuerySerializer(serializers.Serializer):
    at = serializers.DateTimeField(required=False)  # ISO-8601
    cap = serializers.IntegerField(required=False)


class CardQuerySerializer(serializers.Serializer):
    category = serializers.UUIDField(required=False)
