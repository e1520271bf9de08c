"""Translate list-request query parameters into a product store filter."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from bson import ObjectId

from src.models.product import ID_FIELD
from src.services.exceptions import InvalidFilter
from src.services.identifiers import decode_identifier


@dataclass(frozen=True)
class EqualityClause:
    """Match documents whose ``field`` equals ``value`` verbatim."""

    field: str
    value: str

    def to_query(self) -> dict[str, Any]:
        return {self.field: {"$eq": self.value}}

    def matches(self, document: Mapping[str, Any]) -> bool:
        return self.field in document and document[self.field] == self.value


@dataclass(frozen=True)
class IdentifierClause:
    """Match the single document stored under ``value``."""

    value: ObjectId

    def to_query(self) -> dict[str, Any]:
        return {ID_FIELD: self.value}

    def matches(self, document: Mapping[str, Any]) -> bool:
        return document.get(ID_FIELD) == self.value


Clause = EqualityClause | IdentifierClause


@dataclass
class ProductFilter:
    """Conjunction of clauses. Without clauses it matches every product."""

    clauses: list[Clause] = field(default_factory=list)

    def add(self, clause: Clause) -> ProductFilter:
        self.clauses.append(clause)
        return self

    def is_empty(self) -> bool:
        return not self.clauses

    def to_query(self) -> dict[str, Any]:
        """Render the filter as a MongoDB query document."""
        query: dict[str, Any] = {}
        for clause in self.clauses:
            query.update(clause.to_query())
        return query

    def matches(self, document: Mapping[str, Any]) -> bool:
        return all(clause.matches(document) for clause in self.clauses)

    @classmethod
    def by_id(cls, document_id: ObjectId) -> ProductFilter:
        return cls([IdentifierClause(document_id)])


def build_filter(params: Mapping[str, Sequence[str]]) -> ProductFilter:
    """Build a filter from query parameters.

    Only the first value of a repeated parameter is used; the remaining
    values are dropped rather than merged into an "any of" match. The
    ``_id`` parameter is decoded into an ObjectId and an undecodable value
    raises ``InvalidIdentifier`` for the whole filter.

    Names that are empty, start with ``$`` or contain a NUL byte raise
    ``InvalidFilter``.
    """

    product_filter = ProductFilter()
    for name, values in params.items():
        value = _first(values)
        if value is None:
            continue
        _check_field_name(name)
        if name == ID_FIELD:
            product_filter.add(IdentifierClause(decode_identifier(value)))
        else:
            product_filter.add(EqualityClause(name, value))
    return product_filter


def _check_field_name(name: str) -> None:
    if not name or name.startswith("$") or "\0" in name:
        raise InvalidFilter(name)


def _first(values: Sequence[str] | str) -> str | None:
    if isinstance(values, str):
        return values
    return next(iter(values), None)
