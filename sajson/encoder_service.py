# encoder_service.py: assembles the encoders of a ResourceEntity
#
# The document written by the data encoder:
#
#   {"data": [{<attributes and relationships of the first instance>}, ...], "total": <number of instances>}
#
# Attributes are written first, then relationships, both in declaration order.
# The property encoders are resolved once when the entity encoder is built, the service
# itself is read-only after construction so it can be shared between threads
#
import collections.abc
import io
from types import MappingProxyType
import sajson
from .config import get_config
from .encoder_factory import AttributeEncoderFactory
from .encoders import Encoder
from .errors import ConfigurationError
from .filters import FilterChain, NullPolicyFilter
from .generator import JsonGenerator
from .metadata import PropertyMetadataEncoder
from .relationships import RelationshipMapper, RelationshipRepr
from .string_converters import StringConverterFactory


def read_property(obj, name):
    """
    :param obj: instance or mapping
    :param name: property name
    :return: property value, None if it's absent
    """
    if isinstance(obj, collections.abc.Mapping):
        return obj.get(name)
    return getattr(obj, name, None)


def as_sequence(objects):
    """
    A single instance is handled as a sequence with one item
    """
    if objects is None:
        return ()
    if isinstance(objects, collections.abc.Iterable) and not isinstance(objects, (str, bytes, collections.abc.Mapping)):
        return objects
    return (objects,)


class EntityEncoder(Encoder):
    """
    Encodes a single instance as a json object
    """

    def __init__(self, resource_entity, property_encoders):
        """
        :param resource_entity: ResourceEntity
        :param property_encoders: (property name, encoder) tuples in output order
        """
        self.resource_entity = resource_entity
        self.property_encoders = tuple(property_encoders)

    def encode(self, property_name, obj, out) -> bool:
        if obj is None:
            return False
        if property_name is not None:
            out.write_field_name(property_name)
        out.write_start_object()
        for name, encoder in self.property_encoders:
            encoder.encode(name, read_property(obj, name), out)
        out.write_end_object()
        return True

    def __repr__(self):
        return f"<EntityEncoder {self.resource_entity.name}>"


class ListEncoder(Encoder):
    """
    Encodes a sequence as a json array, the items are encoded with the item encoder.
    Items the item encoder skips (None) are written as null
    """

    def __init__(self, item_encoder):
        self.item_encoder = item_encoder

    def encode(self, property_name, objects, out) -> bool:
        if objects is None:
            return False
        if property_name is not None:
            out.write_field_name(property_name)
        self.encode_items(objects, out)
        return True

    def encode_items(self, objects, out) -> int:
        """
        :return: the number of items in objects
        """
        count = 0
        out.write_start_array()
        for obj in objects:
            if not self.item_encoder.encode(None, obj, out):
                # keeps one array element per item, total counts the elements
                out.write_null()
            count += 1
        out.write_end_array()
        return count


class IdEncoder(Encoder):
    """
    Encodes the id of a related instance: the primary key value or, for composite keys,
    the string values joined with the delimiter
    """

    def __init__(self, resource_entity, string_converter_factory, delimiter="_"):
        if not resource_entity.id_attributes:
            raise ConfigurationError(f"Resource entity {resource_entity.name} has no id attributes")
        self.resource_entity = resource_entity
        self.string_converter_factory = string_converter_factory
        self.delimiter = delimiter

    def encode(self, property_name, obj, out) -> bool:
        if obj is None:
            return False
        if property_name is not None:
            out.write_field_name(property_name)
        values = [read_property(obj, name) for name in self.resource_entity.id_attributes]
        if len(values) == 1:
            out.write_object(values[0])
        else:
            out.write_string(self.delimiter.join(self.string_converter_factory.to_string(v) for v in values))
        return True


class DataEncoder(Encoder):
    """
    Writes the {"data": [...], "total": N} envelope, total is the number of encoded instances
    """

    def __init__(self, list_encoder):
        self.list_encoder = list_encoder

    def encode(self, property_name, objects, out) -> bool:
        if property_name is not None:
            out.write_field_name(property_name)
        out.write_start_object()
        out.write_field_name("data")
        count = self.list_encoder.encode_items(as_sequence(objects), out)
        out.write_field_name("total")
        out.write_number(count)
        out.write_end_object()
        return True


class EncoderService:
    """
    Holds the encoding configuration: filters, attribute encoder factory, string converters,
    relationship mapper and the property metadata encoders
    """

    def __init__(
        self,
        filters=(),
        attribute_encoder_factory=None,
        string_converter_factory=None,
        relationship_mapper=None,
        property_metadata_encoders=None,
        id_delimiter="_",
    ):
        """
        :param filters: encoder filters, the first one is the outermost
        :param attribute_encoder_factory: AttributeEncoderFactory
        :param string_converter_factory: StringConverterFactory
        :param relationship_mapper: RelationshipMapper
        :param property_metadata_encoders: PropertyMetadataEncoder by property name
        :param id_delimiter: delimiter of composite ids
        """
        if string_converter_factory is None:
            string_converter_factory = StringConverterFactory()
        if attribute_encoder_factory is None:
            attribute_encoder_factory = AttributeEncoderFactory(string_converter_factory=string_converter_factory)
        property_metadata_encoders = dict(property_metadata_encoders or {})
        for name, metadata_encoder in property_metadata_encoders.items():
            if not isinstance(metadata_encoder, PropertyMetadataEncoder):
                raise ConfigurationError(f"Metadata encoder for '{name}' is not a PropertyMetadataEncoder: {metadata_encoder!r}")

        self.filters = filters if isinstance(filters, FilterChain) else FilterChain(filters)
        self.attribute_encoder_factory = attribute_encoder_factory
        self.string_converter_factory = string_converter_factory
        self.relationship_mapper = relationship_mapper or RelationshipMapper()
        self.property_metadata_encoders = MappingProxyType(property_metadata_encoders)
        self.id_delimiter = id_delimiter

    @classmethod
    def from_config(cls, filters=(), **kwargs):
        """
        Create an EncoderService with the NULL_POLICY, TIMEZONE, DEFAULT_RELATIONSHIP_REPR
        and ID_DELIMITER configuration settings, kwargs are passed to the constructor
        """
        filters = list(filters)
        null_policy = get_config("NULL_POLICY", "omit")
        if null_policy != "omit":
            # innermost, the other filters decide first
            filters.append(NullPolicyFilter(null_policy))

        string_converter_factory = kwargs.pop("string_converter_factory", None) or StringConverterFactory()
        if "attribute_encoder_factory" not in kwargs:
            kwargs["attribute_encoder_factory"] = AttributeEncoderFactory(
                timezone=get_config("TIMEZONE"), string_converter_factory=string_converter_factory
            )
        if "relationship_mapper" not in kwargs:
            kwargs["relationship_mapper"] = RelationshipMapper(get_config("DEFAULT_RELATIONSHIP_REPR", RelationshipRepr.INLINE))
        kwargs.setdefault("id_delimiter", get_config("ID_DELIMITER", "_"))
        return cls(filters, string_converter_factory=string_converter_factory, **kwargs)

    def data_encoder(self, resource_entity) -> Encoder:
        """
        :param resource_entity: ResourceEntity of the encoded instances
        :return: encoder writing the {"data": [...], "total": N} document
        """
        sajson.log.debug(f"Creating data encoder for {resource_entity.name}")
        return DataEncoder(ListEncoder(self.entity_encoder(resource_entity)))

    def entity_encoder(self, resource_entity) -> Encoder:
        """
        :param resource_entity: ResourceEntity
        :return: encoder writing a single instance as a json object
        """
        return EntityEncoder(resource_entity, self._property_encoders(resource_entity))

    def _property_encoders(self, resource_entity):
        for attribute in resource_entity.attributes:
            encoder = self.attribute_encoder_factory.encoder_for_attribute(attribute)
            yield attribute.name, self._wrap(resource_entity, attribute, encoder)

        for relationship in resource_entity.relationships:
            representation = self.relationship_mapper.representation(resource_entity, relationship)
            if representation == RelationshipRepr.OMIT:
                continue
            encoder = self.relationship_encoder(relationship, representation)
            yield relationship.name, self._wrap(resource_entity, relationship, encoder)

    def _wrap(self, resource_entity, prop, encoder):
        metadata_encoder = self.property_metadata_encoders.get(prop.name)
        if metadata_encoder is not None:
            encoder = metadata_encoder.bind(prop, encoder)
        return self.filters.wrap(encoder, resource_entity)

    def relationship_encoder(self, relationship, representation) -> Encoder:
        """
        :param relationship: RelationshipDescriptor
        :param representation: RelationshipRepr.INLINE or RelationshipRepr.ID
        :return: encoder of the related instance(s)
        """
        if representation == RelationshipRepr.INLINE:
            encoder = self.entity_encoder(relationship.target)
        elif representation == RelationshipRepr.ID:
            encoder = IdEncoder(relationship.target, self.string_converter_factory, self.id_delimiter)
        else:
            raise ConfigurationError(f"No encoder for relationship representation {representation}")
        if relationship.to_many:
            encoder = ListEncoder(encoder)
        return encoder

    def encode(self, resource_entity, objects, stream) -> None:
        """
        Write the data document to stream, the stream isn't closed
        :param resource_entity: ResourceEntity
        :param objects: instances, or a single instance
        :param stream: writable text or binary stream
        """
        encoder = self.data_encoder(resource_entity)
        with JsonGenerator(stream) as out:
            encoder.encode(None, objects, out)

    def to_json(self, resource_entity, objects) -> str:
        """
        :return: the data document as a string
        """
        stream = io.StringIO()
        self.encode(resource_entity, objects, stream)
        return stream.getvalue()
