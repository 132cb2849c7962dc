import pytest
from django.core.management import call_command
from django.core.management.base import CommandError

from accounts.models import LearnerSettings, User
from srs.data.models import Card, Category


@pytest.mark.django_db
def test_init_data_loads_sample_deck():
    User.objects.create_user("stale")

    call_command("init_data")

    assert not User.objects.filter(username="stale").exists()
    learner = User.objects.get(username="testuser1")
    assert Category.objects.filter(user=learner).count() == 2
    numbers = list(
        Card.objects.filter(user=learner).order_by("card_number").values_list("card_number", flat=True)
    )
    assert numbers == list(range(1, 9))
    assert LearnerSettings.objects.get(user__username="testuser2").cards_per_day == 2


@pytest.mark.django_db
def test_init_data_missing_file():
    with pytest.raises(CommandError):
        call_command("init_data", file="does-not-exist.json")
