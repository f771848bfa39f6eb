"""
Base model shared by every wire-facing Pydantic model.

Inbound JSON (request bodies and downstream API responses) is matched
case-insensitively, so "OrderId", "orderId" and "order_id" all populate the
same field. Outbound JSON always uses lowerCamelCase aliases.
"""

from decimal import Decimal
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, PlainSerializer, model_validator
from pydantic.alias_generators import to_camel


def _fold(key: str) -> str:
    return key.replace('_', '').lower()


class CamelModel(BaseModel):
    """Pydantic base with camelCase aliases and case-insensitive input keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    @model_validator(mode='before')
    @classmethod
    def match_keys_case_insensitively(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data

        aliases = {}
        for name, field in cls.model_fields.items():
            alias = field.alias or name
            aliases[_fold(name)] = alias
            aliases[_fold(alias)] = alias

        normalized = {}
        for key, value in data.items():
            target = aliases.get(_fold(key), key) if isinstance(key, str) else key
            # An exact spelling wins over a folded one
            if target in normalized and key != target:
                continue
            normalized[target] = value
        return normalized

    def to_json(self) -> str:
        """Serialize using lowerCamelCase field names."""
        return self.model_dump_json(by_alias=True)


# Money values stay exact in Python but go over the wire as JSON numbers
Money = Annotated[
    Decimal,
    PlainSerializer(float, return_type=float, when_used='json'),
]
