"""Optional filter clauses for the list/search queries.

Each clause contributes the joins it needs and a single predicate; values are
always carried as bound parameters. ``apply_filters`` attaches an ordered list
of clauses to a ``Select``: joins first (deduplicated, in order), then the
predicates combined with AND.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

from sqlalchemy import Select, and_, or_
from sqlalchemy.sql.elements import ColumnElement

from workflow_catalog.models import Category, Collection, CollectionCategory, Template, TemplateCategory

Join = tuple[Any, ColumnElement[bool]]

_TEMPLATE_CATEGORY_JOINS: tuple[Join, ...] = (
    (TemplateCategory, TemplateCategory.template_id == Template.id),
    (Category, TemplateCategory.category_id == Category.id),
)


def like_pattern(term: str) -> str:
    return f"%{term}%"


@dataclass(frozen=True)
class CategoryIdFilter:
    """Collections tagged with any of the given category ids."""

    category_ids: tuple[int, ...]

    def joins(self) -> tuple[Join, ...]:
        return ((CollectionCategory, Collection.id == CollectionCategory.collection_id),)

    def predicate(self) -> ColumnElement[bool]:
        return CollectionCategory.category_id.in_(self.category_ids)


@dataclass(frozen=True)
class NameSearchFilter:
    """Collections whose name contains the search term."""

    term: str

    def joins(self) -> tuple[Join, ...]:
        return ()

    def predicate(self) -> ColumnElement[bool]:
        return Collection.name.like(like_pattern(self.term))


@dataclass(frozen=True)
class CategoryNameFilter:
    """Templates tagged with any of the given category names (disjunction)."""

    names: tuple[str, ...]

    def joins(self) -> tuple[Join, ...]:
        return _TEMPLATE_CATEGORY_JOINS

    def predicate(self) -> ColumnElement[bool]:
        return or_(*(Category.name == name for name in self.names))


@dataclass(frozen=True)
class TextSearchFilter:
    """Templates whose name or description contains the search term."""

    term: str

    def joins(self) -> tuple[Join, ...]:
        return ()

    def predicate(self) -> ColumnElement[bool]:
        pattern = like_pattern(self.term)
        return or_(Template.name.like(pattern), Template.description.like(pattern))


Filter = CategoryIdFilter | NameSearchFilter | CategoryNameFilter | TextSearchFilter


def apply_filters(stmt: Select, filters: Sequence[Filter]) -> Select:
    seen: set[Any] = set()
    for clause in filters:
        for target, onclause in clause.joins():
            if target in seen:
                continue
            seen.add(target)
            stmt = stmt.join(target, onclause)

    predicates = [clause.predicate() for clause in filters]
    if predicates:
        stmt = stmt.where(and_(*predicates))
    return stmt


def collection_filters(search: str | None, category_ids: Sequence[int]) -> list[Filter]:
    filters: list[Filter] = []
    if category_ids:
        filters.append(CategoryIdFilter(tuple(category_ids)))
    if search:
        filters.append(NameSearchFilter(search))
    return filters


def template_filters(search: str | None, category_names: Sequence[str]) -> list[Filter]:
    filters: list[Filter] = []
    if category_names:
        filters.append(CategoryNameFilter(tuple(category_names)))
    if search:
        filters.append(TextSearchFilter(search))
    return filters
