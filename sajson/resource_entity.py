# resource_entity.py: descriptors of how a (SQLAlchemy) type is exposed as a json resource
#
# A ResourceEntity is built once per response shape and shared by all encode calls,
# all descriptors are immutable
#
from __future__ import annotations
import dataclasses
from functools import cached_property
from sqlalchemy import inspect as sqla_inspect
from sqlalchemy.orm.interfaces import ONETOMANY, MANYTOMANY
from .categories import Category
from .errors import ConfigurationError
from .type_resolver import resolve
from typing import Any, Iterable, Optional, Tuple


@dataclasses.dataclass(frozen=True)
class AttributeDescriptor:
    """
    :param name: attribute name, unique within the entity
    :param value_type: declared value type (python type, SQLAlchemy type or Category)
    :param sql_type_hint: legacy sql column type, only used when the value type is ambiguous
    """

    name: str
    value_type: Any = None
    sql_type_hint: Any = None

    @cached_property
    def category(self) -> Category:
        return resolve(self.value_type, self.sql_type_hint)


@dataclasses.dataclass(frozen=True)
class RelationshipDescriptor:
    name: str
    target: ResourceEntity
    to_many: bool = False

    @property
    def category(self) -> Category:
        return Category.RELATIONSHIP


@dataclasses.dataclass(frozen=True)
class ResourceEntity:
    """
    Describes how instances of a type are exposed: the attributes and relationships are
    encoded in the order they are declared here
    """

    name: str
    attributes: Tuple[AttributeDescriptor, ...] = ()
    relationships: Tuple[RelationshipDescriptor, ...] = ()
    id_attributes: Tuple[str, ...] = ()

    def __post_init__(self):
        # accept lists, store tuples
        object.__setattr__(self, "attributes", tuple(self.attributes))
        object.__setattr__(self, "relationships", tuple(self.relationships))
        object.__setattr__(self, "id_attributes", tuple(self.id_attributes))
        seen = set()
        for prop in self.attributes + self.relationships:
            if prop.name in seen:
                raise ConfigurationError(f"Duplicate property '{prop.name}' in resource entity {self.name}")
            seen.add(prop.name)

    @property
    def attribute_names(self) -> Tuple[str, ...]:
        return tuple(attr.name for attr in self.attributes)

    def attribute(self, name: str) -> Optional[AttributeDescriptor]:
        for attr in self.attributes:
            if attr.name == name:
                return attr
        return None

    def relationship(self, name: str) -> Optional[RelationshipDescriptor]:
        for rel in self.relationships:
            if rel.name == name:
                return rel
        return None

    @classmethod
    def from_model(cls, model, include: Iterable[str] = (), exclude: Iterable[str] = ()) -> ResourceEntity:
        """
        Create the resource entity of a SQLAlchemy mapped class

        :param model: SQLAlchemy mapped class
        :param include: relationship names to include, nested relationships are specified with a dot-separated path,
                        eg. ["books", "books.publisher"]
        :param exclude: attribute names that shouldn't be exposed
        :return: ResourceEntity
        """
        mapper = sqla_inspect(model)
        exclude = set(exclude)
        include = [inc for inc in include if inc]

        attributes = []
        for column_attr in mapper.column_attrs:
            if column_attr.key in exclude or column_attr.key.startswith("_"):
                continue
            column = column_attr.columns[0]
            sql_type_hint = column.info.get("sql_type", column.type)
            attributes.append(AttributeDescriptor(column_attr.key, column.type, sql_type_hint))

        id_attributes = []
        for pk_column in mapper.primary_key:
            id_attributes.append(mapper.get_property_by_column(pk_column).key)

        included_rels = {inc.split(".")[0] for inc in include}
        for rel_name in included_rels:
            if rel_name not in mapper.relationships:
                raise ConfigurationError(f"Invalid relationship '{rel_name}' for {model.__name__}")

        relationships = []
        for relationship in mapper.relationships:
            if relationship.key not in included_rels:
                continue
            # next_include contains the nested relationship paths
            next_include = [inc.split(".", 1)[1] for inc in include if inc.startswith(relationship.key + ".")]
            target = cls.from_model(relationship.mapper.class_, include=next_include)
            to_many = relationship.direction in (ONETOMANY, MANYTOMANY)
            relationships.append(RelationshipDescriptor(relationship.key, target, to_many))

        return cls(model.__name__, tuple(attributes), tuple(relationships), tuple(id_attributes))
