"""
Base pydantic model shared by records and request/response schemas.

Attributes are snake_case in Python and camelCase on the wire; inbound
payloads may use either spelling.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema serialising field names as camelCase."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class MessageResponse(CamelModel):
    """Confirmation payload returned by delete endpoints."""

    message: str


def reject_explicit_nulls(model: BaseModel, fields: frozenset[str]) -> None:
    """Raise ValueError if any of ``fields`` was sent explicitly as null.

    Partial-update schemas declare every field optional so omitted fields can
    be told apart from supplied ones; a supplied ``null`` is still invalid for
    columns that are not nullable.
    """
    for name in sorted(fields & model.model_fields_set):
        if getattr(model, name) is None:
            raise ValueError(f"{to_camel(name)} may not be null")
