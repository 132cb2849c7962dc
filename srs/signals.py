from django.contrib.auth.signals import user_logged_in, user_logged_out
from django.db.models.signals import post_save
from django.dispatch import receiver

from accounts.models import LearnerSettings
from .services.session import sessions


@receiver(user_logged_in, dispatch_uid="srs_session_established")
def on_learner_signed_in(sender, request, user, **kwargs):
    sessions.establish(user.pk)


@receiver(user_logged_out, dispatch_uid="srs_session_invalidated")
def on_learner_signed_out(sender, request, user, **kwargs):
    if user is not None:
        sessions.invalidate(user.pk)


@receiver(post_save, sender=LearnerSettings, dispatch_uid="srs_settings_changed")
def on_settings_saved(sender, instance, **kwargs):
    # Applies from the next restart; the queue on screen is left alone
    session = sessions.get(instance.user_id)
    if session is not None:
        session.forget_settings()
