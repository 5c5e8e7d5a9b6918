"""Relationship taxonomy and classification of declared relationships."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

import structlog
from sqlalchemy.orm import Mapper, RelationshipProperty
from sqlalchemy.orm.interfaces import MANYTOMANY, MANYTOONE, ONETOMANY

log = structlog.get_logger(__name__)


class RelationshipKind(str, Enum):
    """Closed set of association kinds a model may declare."""

    HAS_ONE = "has_one"
    HAS_MANY = "has_many"
    BELONGS_TO = "belongs_to"
    BELONGS_TO_MANY = "belongs_to_many"
    HAS_ONE_THROUGH = "has_one_through"
    HAS_MANY_THROUGH = "has_many_through"
    MORPH_ONE = "morph_one"
    MORPH_MANY = "morph_many"
    MORPH_TO = "morph_to"
    MORPH_TO_MANY = "morph_to_many"


@dataclass(frozen=True, slots=True)
class RelationshipRecord:
    member: str
    kind: RelationshipKind
    related: str

    def to_dict(self) -> dict[str, str]:
        return {"kind": self.kind.value, "related": self.related}


@dataclass(frozen=True, slots=True)
class SkippedRelationship:
    member: str
    reason: str


RelationshipOutcome = RelationshipRecord | SkippedRelationship


def qualified_class_name(cls: type) -> str:
    return f"{cls.__module__}.{cls.__qualname__}"


def resolve_target(prop: RelationshipProperty[Any]) -> type:
    """The class a configured relationship points at."""
    argument = prop.argument
    if isinstance(argument, Mapper):
        return argument.class_
    if isinstance(argument, type):
        return argument
    return prop.entity.class_


def declared_target(prop: RelationshipProperty[Any]) -> type:
    """The class a relationship points at, read from its declaration alone.

    Used when the registry cannot be configured. String names match a mapped
    class of the same registry by class name or qualified name.

    Raises:
        LookupError: The name matches no mapped class, or more than one.
    """
    argument = prop.argument
    if callable(argument) and not isinstance(argument, type):
        argument = argument()
    if isinstance(argument, Mapper):
        return argument.class_
    if isinstance(argument, type):
        return argument

    name = getattr(argument, "__forward_arg__", argument)
    matches = [
        mapper.class_
        for mapper in prop.parent.registry.mappers
        if name in (mapper.class_.__name__, qualified_class_name(mapper.class_))
    ]
    if len(matches) != 1:
        raise LookupError(f"Cannot resolve relationship target {name!r}")
    return matches[0]


def classify(prop: RelationshipProperty[Any], target: type) -> RelationshipKind:
    """Determine the kind of a relationship.

    An explicit ``info={"kind": ...}`` tag wins; otherwise the kind is
    inferred from the secondary table, the configured direction, and finally
    the foreign keys between the two tables. Unconfigured relationships have
    no direction and go straight to the foreign keys.

    Raises:
        ValueError: The explicit tag is not a known kind.
    """
    tag = prop.info.get("kind")
    if tag is not None:
        return RelationshipKind(tag)

    if prop.secondary is not None:
        return RelationshipKind.BELONGS_TO_MANY

    direction = getattr(prop, "direction", None)
    if direction is MANYTOONE:
        return RelationshipKind.BELONGS_TO
    if direction is MANYTOMANY:
        return RelationshipKind.BELONGS_TO_MANY
    if direction is ONETOMANY:
        return RelationshipKind.HAS_MANY if prop.uselist else RelationshipKind.HAS_ONE

    local_table = prop.parent.local_table
    target_table = getattr(target, "__table__", None)
    if target_table is not None and any(
        fk.references(target_table) for fk in getattr(local_table, "foreign_keys", ())
    ):
        return RelationshipKind.BELONGS_TO
    if prop.uselist is False:
        return RelationshipKind.HAS_ONE
    return RelationshipKind.HAS_MANY


def describe_relationship(
    member: str, prop: RelationshipProperty[Any], *, configured: bool = True
) -> RelationshipOutcome:
    try:
        target = resolve_target(prop) if configured else declared_target(prop)
        kind = classify(prop, target)
    except Exception as e:
        return SkippedRelationship(member=member, reason=str(e) or type(e).__name__)
    return RelationshipRecord(member=member, kind=kind, related=qualified_class_name(target))


def declared_relationships(mapper: Mapper[Any]) -> list[tuple[str, RelationshipProperty[Any]]]:
    # Mapper.relationships configures the whole registry before answering
    return [
        (key, prop)
        for key, prop in mapper._props.items()
        if isinstance(prop, RelationshipProperty)
    ]


def collect_relationships(
    mapper: Mapper[Any], *, configured: bool = True
) -> dict[str, dict[str, str]]:
    """Relationships declared on ``mapper`` itself, keyed by member name.

    Each member is evaluated on its own; members that cannot be resolved or
    classified are logged and left out. Pass ``configured=False`` when the
    registry failed to configure, so members are read from their declarations.
    """
    members = mapper.relationships.items() if configured else declared_relationships(mapper)
    relationships: dict[str, dict[str, str]] = {}
    for member, prop in members:
        if member.startswith("_") or prop.parent is not mapper:
            continue
        outcome = describe_relationship(member, prop, configured=configured)
        if isinstance(outcome, SkippedRelationship):
            log.info(
                "relationship_skipped",
                model=mapper.class_.__name__,
                member=outcome.member,
                reason=outcome.reason,
            )
            continue
        relationships[member] = outcome.to_dict()
    return relationships
