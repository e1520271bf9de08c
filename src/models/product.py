"""Product domain model and its wire/storage representations."""

from __future__ import annotations

from typing import Any

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field, field_validator

ID_FIELD = "_id"


class Product(BaseModel):
    """An electronic product such as a phone or a laptop.

    Parsing only checks JSON shape and types. The structural constraints
    (name length, price ceiling, currency code...) are enforced by
    ``src.services.validation`` so that a missing field is reported as a
    violation instead of a parse error.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str | None = Field(
        default=None,
        alias=ID_FIELD,
        description="Store-assigned identifier, ignored on input",
    )
    name: str | None = Field(default=None, alias="product_name")
    price: int | None = None
    currency: str | None = None
    discount: int = 0
    vendor: str | None = None
    accessories: list[str] = Field(default_factory=list)
    is_essential: bool = False

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_object_id(cls, value: Any) -> Any:
        if isinstance(value, ObjectId):
            return str(value)
        return value

    @field_validator("accessories", mode="before")
    @classmethod
    def _null_accessories(cls, value: Any) -> Any:
        return [] if value is None else value

    def to_wire(self) -> dict[str, Any]:
        """JSON representation returned to API callers."""
        payload = self.model_dump(by_alias=True)
        if not payload["accessories"]:
            payload.pop("accessories")
        return payload

    def to_document(self, document_id: ObjectId | None = None) -> dict[str, Any]:
        """Storage representation; ``document_id`` overrides the model id."""
        document = self.model_dump(by_alias=True, exclude={"id"})
        if not document["accessories"]:
            document.pop("accessories")
        if document_id is not None:
            document[ID_FIELD] = document_id
        elif self.id is not None:
            document[ID_FIELD] = ObjectId(self.id)
        return document

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> Product:
        """Load a stored document. Stored records are trusted as valid."""
        return cls.model_validate(document)
