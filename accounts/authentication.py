from rest_framework.authentication import BaseAuthentication


class MockHeaderAuthentication(BaseAuthentication):
    """
    Trust the user already attached by MockLoginUserMiddleware.

    The header login replaces the sign-in screen, so there is no CSRF
    token to check against.
    """

    def authenticate(self, request):
        user = getattr(request._request, "user", None)
        if user is None or not user.is_active or not user.is_authenticated:
            return None
        return (user, None)
