# storerating/models/fields.py
"""
Tortoise fields that carry a column CHECK constraint.

The constraint is part of the column type, so it is emitted by
`Tortoise.generate_schemas()` and by Aerich migrations alike, and it holds
for writes that skip model validation (queryset updates, raw SQL).

`check` is an SQL boolean expression with `{column}` standing for the quoted
column name, e.g. "{column} BETWEEN 1 AND 5".
"""
from enum import Enum
from typing import Any

from tortoise import fields
from tortoise.fields.data import CharEnumFieldInstance


class ColumnCheckMixin:
    def __init__(self, *args: Any, check: str, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.check = check

    @property
    def check_sql(self) -> str:
        column = self.source_field or self.model_field_name
        return self.check.format(column=f'"{column}"')

    @property
    def SQL_TYPE(self) -> str:  # type: ignore[override]
        return f"{super().SQL_TYPE} CHECK ({self.check_sql})"

    def deconstruct(self) -> tuple[str, list, dict]:
        path, args, kwargs = super().deconstruct()
        kwargs["check"] = self.check
        return path, args, kwargs


class CheckedIntField(ColumnCheckMixin, fields.IntField):
    pass


class CheckedCharField(ColumnCheckMixin, fields.CharField):
    pass


class CheckedCharEnumField(ColumnCheckMixin, CharEnumFieldInstance):
    """CharEnumField whose column only accepts the enum's values."""

    def __init__(self, enum_type: type[Enum], **kwargs: Any) -> None:
        values = ", ".join(f"'{item.value}'" for item in enum_type)
        kwargs.setdefault("check", f"{{column}} IN ({values})")
        super().__init__(enum_type, **kwargs)


def length_between(low: int, high: int) -> str:
    return f"LENGTH({{column}}) BETWEEN {low} AND {high}"
