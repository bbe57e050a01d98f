"""
Attribute encoder factory: maps an attribute category to its (stateless) encoder
"""
import sajson
from .categories import Category
from .encoders import Encoder, StringEncoder, NumericEncoder, BooleanEncoder, GenericEncoder
from .errors import ConfigurationError
from .temporal import ISODateEncoder, ISOTimeEncoder, ISODateTimeEncoder, get_timezone
from typing import Any, Dict, Optional

TEMPORAL_ENCODERS = {
    Category.DATE: ISODateEncoder,
    Category.TIME: ISOTimeEncoder,
    Category.DATETIME: ISODateTimeEncoder,
}


class AttributeEncoderFactory:
    """
    Encoders are created on first use and reused afterwards, they don't hold per-call state
    """

    def __init__(self, overrides: Optional[Dict[Any, Encoder]] = None, timezone=None, string_converter_factory=None) -> None:
        """
        :param overrides: custom encoders keyed by declared value type or by Category
        :param timezone: zone of the formatted temporal values, None for the system default zone
        :param string_converter_factory: used by the string encoder
        """
        overrides = dict(overrides or {})
        for key, encoder in overrides.items():
            if not isinstance(encoder, Encoder):
                raise ConfigurationError(f"Encoder override for {key} is not an Encoder: {encoder!r}")
        self.overrides = overrides
        self.timezone = get_timezone(timezone)
        self.string_converter_factory = string_converter_factory
        self._encoders = {}

    def encoder_for(self, category: Category) -> Encoder:
        """
        :param category: attribute category
        :return: cached encoder, the generic encoder for unknown categories
        """
        encoder = self._encoders.get(category)
        if encoder is None:
            # an identical instance may be built concurrently, any of them can be kept
            encoder = self._encoders.setdefault(category, self._build(category))
        return encoder

    def encoder_for_attribute(self, attribute) -> Encoder:
        """
        :param attribute: AttributeDescriptor
        :return: the override for the declared value type or category, the category encoder otherwise
        """
        value_type = attribute.value_type
        try:
            encoder = self.overrides.get(value_type)
        except TypeError:
            # unhashable value type
            encoder = None
        if encoder is None:
            encoder = self.overrides.get(attribute.category)
        if encoder is None:
            encoder = self.encoder_for(attribute.category)
        return encoder

    def _build(self, category: Category) -> Encoder:
        if category in self.overrides:
            return self.overrides[category]
        if category in TEMPORAL_ENCODERS:
            return TEMPORAL_ENCODERS[category](self.timezone)
        if category == Category.STRING:
            return StringEncoder(self.string_converter_factory)
        if category == Category.NUMERIC:
            return NumericEncoder()
        if category == Category.BOOLEAN:
            return BooleanEncoder()
        if category != Category.OTHER:
            sajson.log.debug(f"No attribute encoder for category {category}, using the generic encoder")
        return GenericEncoder()
