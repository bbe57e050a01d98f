# flake8: noqa: F401
#
# sajson: SQLAlchemy entity to json encoding
#
from .sajson_init import SAJSON, log
from .errors import EncoderError, ConfigurationError, DataError, EncoderIOError, GenerationError, ValidationError
from .categories import Category
from .type_resolver import resolve
from .types import LegacyTimestamp
from .resource_entity import AttributeDescriptor, RelationshipDescriptor, ResourceEntity
from .encoders import Encoder
from .encoder_factory import AttributeEncoderFactory
from .string_converters import StringConverterFactory
from .filters import EncoderFilter, FilterChain, NullPolicyFilter, ExcludeFilter, RedactionFilter
from .metadata import PropertyMetadataEncoder, TypeMetadataEncoder
from .relationships import RelationshipMapper, RelationshipRepr
from .generator import JsonGenerator
from .encoder_service import EncoderService
from .attr_parse import parse_attr
from .response import SAJSONResponse, make_encoded_response
from .__about__ import __version__, __description__

__all__ = (
    "__version__",
    "__description__",
    #
    "SAJSON",
    "log",
    # descriptors:
    "Category",
    "resolve",
    "LegacyTimestamp",
    "AttributeDescriptor",
    "RelationshipDescriptor",
    "ResourceEntity",
    # encoding:
    "Encoder",
    "AttributeEncoderFactory",
    "StringConverterFactory",
    "EncoderFilter",
    "FilterChain",
    "NullPolicyFilter",
    "ExcludeFilter",
    "RedactionFilter",
    "PropertyMetadataEncoder",
    "TypeMetadataEncoder",
    "RelationshipMapper",
    "RelationshipRepr",
    "JsonGenerator",
    "EncoderService",
    "SAJSONResponse",
    "make_encoded_response",
    # decoding:
    "parse_attr",
    # Errors:
    "EncoderError",
    "ConfigurationError",
    "DataError",
    "EncoderIOError",
    "GenerationError",
    "ValidationError",
)
