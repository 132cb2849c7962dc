from django.urls import path
from .views import (
    CardListView,
    GradeView,
    RestartView,
    RevealView,
    SessionView,
    StatsView,
    TodayQueueView,
)

urlpatterns = [
    path("cards", CardListView.as_view(), name="cards"),
    path("review/today", TodayQueueView.as_view(), name="review-today"),
    path("review/session", SessionView.as_view(), name="review-session"),
    path("review/session/reveal", RevealView.as_view(), name="review-reveal"),
    path("review/session/grade", GradeView.as_view(), name="review-grade"),
    path("review/session/restart", RestartView.as_view(), name="review-restart"),
    path("review/stats", StatsView.as_view(), name="review-stats"),
]
