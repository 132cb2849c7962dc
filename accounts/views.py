from django.contrib.auth import logout
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from .models import LearnerSettings
from .serializers import LearnerSettingsSerializer


def _unauthenticated():
    return Response(
        {"error": "User not authenticated"}, status=status.HTTP_401_UNAUTHORIZED
    )


class UserViewSet(viewsets.ViewSet):
    """
    ViewSet for learner-related operations.
    """

    @action(detail=False, methods=["get"])
    def me(self, request):
        """
        Returns the username of the logged-in user.
        """
        if request.user.is_authenticated:
            return Response(
                {"username": request.user.username}, status=status.HTTP_200_OK
            )
        else:
            return _unauthenticated()

    @action(detail=False, methods=["post"], url_path="logout", url_name="logout")
    def sign_out(self, request):
        """
        Ends the learner's session; any open review session is discarded.
        """
        if not request.user.is_authenticated:
            return _unauthenticated()
        logout(request)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=False, methods=["get", "patch"], url_path="settings", url_name="settings")
    def learner_settings(self, request):
        """
        Reads or updates the learner's daily new-card cap.
        """
        if not request.user.is_authenticated:
            return _unauthenticated()

        prefs, _ = LearnerSettings.objects.get_or_create(user=request.user)
        if request.method == "GET":
            return Response(LearnerSettingsSerializer(prefs).data)

        s = LearnerSettingsSerializer(prefs, data=request.data, partial=True)
        s.is_valid(raise_exception=True)
        s.save()
        return Response(s.data, status=status.HTTP_200_OK)
