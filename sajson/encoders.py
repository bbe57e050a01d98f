"""
Encoders write a single property (or a single array item when the property name is None)
into a JsonGenerator:

    encoder.encode("name", "Bob", out)  # => "name":"Bob"
    encoder.encode(None, "Bob", out)    # => "Bob"

encode() returns True when something was written, False when the property was skipped.
Encoders don't hold any per-call state so a single instance can be shared by all requests
"""
import decimal
import math
from .errors import DataError
from .string_converters import StringConverterFactory


class Encoder:
    """
    Encoder interface
    """

    def encode(self, property_name, value, out) -> bool:
        raise NotImplementedError  # pragma: no cover

    def __repr__(self):
        return f"<{self.__class__.__name__}>"


class ValueEncoder(Encoder):
    """
    Base class of the attribute value encoders.
    None values are skipped: the property isn't written at all, the NullPolicyFilter can
    be configured to write a json null instead
    """

    def encode(self, property_name, value, out) -> bool:
        if value is None:
            return False
        if property_name is not None:
            out.write_field_name(property_name)
        self.encode_value(value, out)
        return True

    def encode_value(self, value, out) -> None:
        raise NotImplementedError  # pragma: no cover


class StringEncoder(ValueEncoder):
    def __init__(self, string_converter_factory=None):
        if string_converter_factory is None:
            string_converter_factory = StringConverterFactory()
        self.string_converter_factory = string_converter_factory

    def encode_value(self, value, out):
        if not isinstance(value, str):
            value = self.string_converter_factory.converter(type(value))(value)
        out.write_string(value)


class NumericEncoder(ValueEncoder):
    def encode_value(self, value, out):
        if isinstance(value, bool) or not isinstance(value, (int, float, decimal.Decimal)):
            raise DataError(f"Invalid numeric value {value!r}")
        if isinstance(value, decimal.Decimal):
            value = float(value)
        if isinstance(value, float) and not math.isfinite(value):
            raise DataError(f"Invalid numeric value {value!r}")
        out.write_number(value)


class BooleanEncoder(ValueEncoder):
    def encode_value(self, value, out):
        if not isinstance(value, bool):
            raise DataError(f"Invalid boolean value {value!r}")
        out.write_boolean(value)


class GenericEncoder(ValueEncoder):
    """
    Fallback encoder: the value is serialized with the SAJSONEncoder
    """

    def encode_value(self, value, out):
        out.write_object(value)
