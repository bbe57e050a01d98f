# Conversion of non-temporal scalar values to strings
# used by the StringEncoder for non-str values and to render composite ids
import enum
import uuid
from .errors import ConfigurationError
from typing import Any, Callable, Dict, Optional


def _convert_bytes(value: bytes) -> str:
    return value.hex()


def _convert_enum(value: enum.Enum) -> str:
    return str(value.value)


DEFAULT_CONVERTERS = ((uuid.UUID, str), (bytes, _convert_bytes), (enum.Enum, _convert_enum))


class StringConverterFactory:
    """
    Lookup of the to-string conversion function of a value type
    """

    def __init__(self, converters: Optional[Dict[type, Callable[[Any], str]]] = None) -> None:
        """
        :param converters: custom conversion functions, keyed by value type
        """
        converters = dict(converters or {})
        for value_type, converter in converters.items():
            if not callable(converter):
                raise ConfigurationError(f"String converter for {value_type} is not callable")
        self._converters = converters

    def converter(self, value_type: type) -> Callable[[Any], str]:
        """
        :param value_type: type of the values that will be converted
        :return: conversion function
        """
        converter = self._converters.get(value_type)
        if converter is not None:
            return converter
        for base_type, converter in DEFAULT_CONVERTERS:
            if isinstance(value_type, type) and issubclass(value_type, base_type):
                return converter
        return str

    def to_string(self, value: Any) -> str:
        if isinstance(value, str):
            return value
        return self.converter(type(value))(value)
