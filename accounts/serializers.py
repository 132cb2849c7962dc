from rest_framework import serializers

from .models import LearnerSettings


class LearnerSettingsSerializer(serializers.ModelSerializer):
    class Meta:
        model = LearnerSettings
        fields = ["cards_per_day", "updated_at"]
        read_only_fields = ["updated_at"]
