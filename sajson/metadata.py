"""
Property metadata encoders replace (or augment) the plain encoding of a property,
they're configured per property name in the EncoderService
"""
from .categories import Category
from .encoders import Encoder


class PropertyMetadataEncoder(Encoder):
    """
    Base class, subclasses implement encode() and write a complete value:
    no object or array may be left open
    """

    category = Category.METADATA

    def bind(self, attribute, value_encoder) -> Encoder:
        """
        :param attribute: AttributeDescriptor the encoder is used for
        :param value_encoder: the plain encoder of the attribute
        :return: the encoder used for the attribute, this encoder replaces the plain encoder by default
        """
        return self


class TypeMetadataEncoder(PropertyMetadataEncoder):
    """
    Writes the category next to the plain value:

        "created": {"type": "datetime", "value": "2016-03-26T10:00:47"}
    """

    def __init__(self, category=Category.METADATA, value_encoder=None):
        self.category = category
        self.value_encoder = value_encoder

    def bind(self, attribute, value_encoder):
        return TypeMetadataEncoder(attribute.category, value_encoder)

    def encode(self, property_name, value, out) -> bool:
        if property_name is not None:
            out.write_field_name(property_name)
        out.write_start_object()
        out.write_field_name("type")
        out.write_string(self.category.value)
        if self.value_encoder is not None:
            # the value member is left out when the plain encoder skips it
            self.value_encoder.encode("value", value, out)
        out.write_end_object()
        return True
