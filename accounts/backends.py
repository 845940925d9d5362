from django.contrib.auth import get_user_model
from django.contrib.auth.backends import ModelBackend

from .services import normalize_code


class AccessCodeBackend(ModelBackend):
    """Authenticate learners by their access code alone."""

    def authenticate(self, request, access_code=None, **kwargs):
        if not access_code:
            return None
        User = get_user_model()
        user = User.objects.filter(access_code=normalize_code(access_code)).first()
        if user is None or not self.user_can_authenticate(user):
            return None
        return user
