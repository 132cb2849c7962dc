import json
import os
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction
from accounts.models import LearnerSettings, User
from srs.data.models import Card, Category


class Command(BaseCommand):
    help = "Replace all learners with the decks described in a JSON file"

    def add_arguments(self, parser):
        parser.add_argument(
            "--file", default="sample_deck.json", help="JSON file name to load data from"
        )

    def handle(self, *args, **options):
        file_name = options.get("file", "sample_deck.json")
        json_file_path = os.path.join(os.path.dirname(__file__), file_name)

        try:
            with open(json_file_path) as json_file:
                data = json.load(json_file)
        except (OSError, json.JSONDecodeError) as e:
            raise CommandError(f"Error loading data: {e}") from e

        with transaction.atomic():
            User.objects.all().delete()
            self.stdout.write(self.style.SUCCESS("All existing learner data has been deleted"))

            card_count = 0
            for learner in data.get("learners", []):
                user = User.objects.create_user(
                    learner["username"],
                    email=learner.get("email", f"{learner['username']}@example.com"),
                    password=learner.get("password", "testpassword"),
                )
                if "cards_per_day" in learner:
                    LearnerSettings.objects.create(
                        user=user, cards_per_day=learner["cards_per_day"]
                    )

                number = 0
                for entry in learner.get("categories", []):
                    category = Category.objects.create(
                        user=user,
                        name=entry["name"],
                        description=entry.get("description"),
                    )
                    for card in entry.get("cards", []):
                        number += 1
                        Card.objects.create(
                            user=user,
                            category=category,
                            card_number=number,
                            question=card["question"],
                            answer=card["answer"],
                            image_url=card.get("image_url"),
                            audio_url=card.get("audio_url"),
                            difficulty=card.get("difficulty", 1),
                        )
                card_count += number

        self.stdout.write(
            self.style.SUCCESS(
                f"Loaded {len(data.get('learners', []))} learners and {card_count} cards from {file_name}"
            )
        )
