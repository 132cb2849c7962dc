from django.contrib.auth import login, logout
from django.http import HttpResponse

from accounts.models import User

import logging

logger = logging.getLogger(__name__)


# Header login stands in for the identity provider's sign-in flow
class MockLoginUserMiddleware:
    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        if request.path.startswith("/api"):
            username = request.headers.get("X-User-NAME")
            if username:
                try:
                    user = User.objects.get(username=username)
                except User.DoesNotExist:
                    logger.warning(f"Mock login rejected for unknown user: {username}")
                    return HttpResponse(
                        "User not found or invalid credentials.", status=401
                    )
                # Only a change of identity counts as a sign-in event
                if request.user.is_authenticated and request.user.pk == user.pk:
                    request.user = user
                else:
                    if request.user.is_authenticated:
                        # Switching identity signs the previous learner out first
                        logger.info(f"Mock logout for user: {request.user.username}")
                        logout(request)
                    logger.info(f"Mock login for user: {username}")
                    login(request, user)
        response = self.get_response(request)
        return response
