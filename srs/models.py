from .data.models import Card, Category, ReviewEvent  # noqa: F401
