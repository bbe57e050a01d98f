# How related instances are represented in the encoded entity:
# - inline: the related entity is encoded as a nested object (array of objects for to-many relationships)
# - id: the id of the related entity (array of ids for to-many relationships)
# - omit: the relationship isn't written
import enum
from .errors import ConfigurationError


class RelationshipRepr(enum.Enum):
    INLINE = "inline"
    ID = "id"
    OMIT = "omit"


def to_repr(value) -> RelationshipRepr:
    """
    :param value: RelationshipRepr or its name/value
    :return: RelationshipRepr
    """
    if isinstance(value, RelationshipRepr):
        return value
    try:
        return RelationshipRepr(str(value).lower())
    except ValueError:
        raise ConfigurationError(f"Invalid relationship representation {value!r}, use one of {[r.value for r in RelationshipRepr]}")


class RelationshipMapper:
    """
    Decides the representation of each relationship
    """

    def __init__(self, default=RelationshipRepr.INLINE, overrides=None):
        """
        :param default: representation of the relationships without override
        :param overrides: representation keyed by relationship name or by "Entity.relationship"
        """
        self.default = to_repr(default)
        self.overrides = {name: to_repr(value) for name, value in (overrides or {}).items()}

    def representation(self, resource_entity, relationship) -> RelationshipRepr:
        """
        :param resource_entity: entity that holds the relationship
        :param relationship: RelationshipDescriptor
        :return: RelationshipRepr
        """
        qualified_name = f"{resource_entity.name}.{relationship.name}"
        if qualified_name in self.overrides:
            return self.overrides[qualified_name]
        return self.overrides.get(relationship.name, self.default)
