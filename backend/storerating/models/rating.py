# storerating/models/rating.py
"""
Database model for ratings.
One row per (user, store): re-rating a store updates the existing row.
"""
from tortoise import fields, models
from tortoise.validators import MaxValueValidator, MinValueValidator

from storerating.models.fields import CheckedIntField


class Rating(models.Model):
    """
    Rating database model.

    Relationships:
    - Belongs to a User (cascade delete)
    - Belongs to a Store (cascade delete)
    """
    id = fields.IntField(pk=True)
    user = fields.ForeignKeyField("models.User", related_name="ratings", on_delete=fields.CASCADE)
    store = fields.ForeignKeyField("models.Store", related_name="ratings", on_delete=fields.CASCADE)
    rating = CheckedIntField(
        check="{column} BETWEEN 1 AND 5",
        validators=[MinValueValidator(1), MaxValueValidator(5)],
    )  # 1-5 stars
    created_at = fields.DatetimeField(auto_now_add=True)
    updated_at = fields.DatetimeField(auto_now=True)

    class Meta:
        table = "ratings"
        unique_together = (("user", "store"),)
