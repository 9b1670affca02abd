# storerating/models/store.py
"""
Database model for stores.
A store can be rated by users and is optionally owned by a store_owner account.
"""
from tortoise import fields, models
from tortoise.validators import MinLengthValidator

from storerating.models.fields import CheckedCharField, length_between


class Store(models.Model):
    """
    Store database model.

    Relationships:
    - Belongs to an owner User (many-to-one, nullable)
    - Has many Ratings (via related_name="ratings")

    The owner foreign key is RESTRICT: a user cannot be removed while a
    store still points at them. The admin handlers check this first and
    answer with a readable message.
    """
    id = fields.IntField(pk=True)
    name = CheckedCharField(max_length=60, check=length_between(3, 60), validators=[MinLengthValidator(3)])
    email = fields.CharField(max_length=255, unique=True, index=True)
    address = CheckedCharField(max_length=400, check=length_between(1, 400))
    owner = fields.ForeignKeyField(
        "models.User",
        related_name="stores",
        null=True,
        on_delete=fields.RESTRICT,
    )
    created_at = fields.DatetimeField(auto_now_add=True)
    updated_at = fields.DatetimeField(auto_now=True)

    class Meta:
        table = "stores"
