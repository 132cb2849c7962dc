from rest_framework import views, status
from rest_framework.response import Response
from django.utils import timezone
import structlog
import uuid
from ..data.repos import list_cards
from ..domain.enums import QUALITY_LABELS
from ..exceptions import Unauthenticated
from ..services.due import compute_today_queue
from ..services.session import sessions
from ..services.stats import review_stats
from ..utils.time import to_local_iso
from .serializers import (
    CardQuerySerializer,
    CardSerializer,
    DueQueueSerializer,
    DueQuerySerializer,
    GradeInSerializer,
    SessionSerializer,
)

base_logger = structlog.get_logger()


def learner_id_for(request):
    if not request.user or not request.user.is_authenticated:
        raise Unauthenticated("User not authenticated")
    return request.user.pk


def session_for(request):
    learner_id = learner_id_for(request)
    session = sessions.get(learner_id) or sessions.establish(learner_id)
    return session.ensure_loaded()


class SchedulingView(views.APIView):
    def initial(self, request, *args, **kwargs):
        super().initial(request, *args, **kwargs)
        # Create a unique request_id
        self.logger = base_logger.bind(request_id=str(uuid.uuid4()))

    def log_session(self, event, session):
        self.logger.info(
            event,
            learner_id=str(session.learner_id),
            state=session.state.value,
            completed=session.completed,
            total=session.total,
        )


class CardListView(SchedulingView):
    def get(self, request):
        learner_id = learner_id_for(request)
        qs = CardQuerySerializer(data=request.query_params)
        qs.is_valid(raise_exception=True)

        cards = list_cards(learner_id, qs.validated_data.get("category"))
        return Response({"cards": CardSerializer(cards, many=True).data})


class TodayQueueView(SchedulingView):
    def get(self, request):
        learner_id = learner_id_for(request)
        qs = DueQuerySerializer(data=request.query_params)
        qs.is_valid(raise_exception=True)
        now = qs.validated_data.get("at") or timezone.now()

        queue = compute_today_queue(learner_id, now, qs.validated_data.get("cap"))

        self.logger.info(
            "today_queue_api_response",
            learner_id=str(learner_id),
            at_utc=now.isoformat(),
            at_local=to_local_iso(now),
            new_count=len(queue.new),
            review_count=len(queue.review),
        )
        return Response(DueQueueSerializer(queue).data)


class SessionView(SchedulingView):
    def get(self, request):
        session = session_for(request)
        self.log_session("session_api_response", session)
        return Response(SessionSerializer(session).data)


class RevealView(SchedulingView):
    def post(self, request):
        session = session_for(request)
        session.reveal()
        self.log_session("reveal_api_response", session)
        return Response(SessionSerializer(session).data)


class GradeView(SchedulingView):
    def post(self, request):
        session = session_for(request)
        s = GradeInSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        result = session.grade(s.validated_data["quality"])

        self.logger.info(
            "grade_api_response",
            learner_id=str(session.learner_id),
            quality=int(result.quality),
            days_added=result.days_added,
            next_review_utc=result.next_review_at.isoformat(),
            state=session.state.value,
        )
        return Response(
            {
                "next_review_utc": result.next_review_at.isoformat(),
                "next_review_local": to_local_iso(result.next_review_at),
                "days_added": result.days_added,
                "quality": int(result.quality),
                "quality_label": QUALITY_LABELS[result.quality],
                "session": SessionSerializer(session).data,
            },
            status=status.HTTP_201_CREATED,
        )


class RestartView(SchedulingView):
    def post(self, request):
        learner_id = learner_id_for(request)
        session = sessions.get(learner_id) or sessions.establish(learner_id)
        session.restart()
        self.log_session("restart_api_response", session)
        return Response(SessionSerializer(session).data)


class StatsView(SchedulingView):
    def get(self, request):
        learner_id = learner_id_for(request)
        stats = review_stats(learner_id)

        self.logger.info(
            "stats_api_response",
            learner_id=str(learner_id),
            cards=stats.cards,
            reviews_due=stats.reviews_due,
            reviews_completed_today=stats.reviews_completed_today,
        )
        return Response(
            {
                "categories": stats.categories,
                "cards": stats.cards,
                "reviews_due": stats.reviews_due,
                "reviews_completed_today": stats.reviews_completed_today,
            }
        )
