"""
Encoder filters

A filter is called for every property instead of the encoder it wraps:

    filter(property_name, value, out, downstream) -> bool

It can call the downstream encoder, call it with another value or write nothing at all
(return False). Filters are folded around the encoder: the first filter of the chain
is the outermost one, an empty chain returns the encoder as is
"""
from functools import reduce
from .config import NULL_POLICIES
from .encoders import Encoder
from .errors import ConfigurationError


class EncoderFilter:
    """
    Filter base class, subclasses implement __call__ and optionally matches()
    """

    def matches(self, resource_entity) -> bool:
        """
        :param resource_entity: entity whose properties will be encoded, None for standalone encoders
        :return: whether this filter applies to the entity
        """
        return True

    def __call__(self, property_name, value, out, downstream) -> bool:
        return downstream.encode(property_name, value, out)


class FilteredEncoder(Encoder):
    """
    Encoder with a single filter in front of it
    """

    def __init__(self, encoder_filter, downstream):
        self.encoder_filter = encoder_filter
        self.downstream = downstream

    def encode(self, property_name, value, out) -> bool:
        return self.encoder_filter(property_name, value, out, self.downstream)

    def __repr__(self):
        return f"<FilteredEncoder {self.encoder_filter!r} -> {self.downstream!r}>"


class FilterChain:
    """
    Ordered, immutable list of filters
    """

    def __init__(self, filters=()):
        filters = tuple(filters)
        for encoder_filter in filters:
            if not callable(encoder_filter):
                raise ConfigurationError(f"Encoder filter {encoder_filter!r} is not callable")
        self.filters = filters

    def __len__(self):
        return len(self.filters)

    def __iter__(self):
        return iter(self.filters)

    def wrap(self, encoder: Encoder, resource_entity=None) -> Encoder:
        """
        :param encoder: encoder to be filtered
        :param resource_entity: only the filters matching this entity are applied
        :return: filtered encoder
        """
        filters = [f for f in self.filters if getattr(f, "matches", None) is None or f.matches(resource_entity)]
        # fold from the last filter to the first so the first one ends up outermost
        return reduce(lambda downstream, encoder_filter: FilteredEncoder(encoder_filter, downstream), reversed(filters), encoder)


class NullPolicyFilter(EncoderFilter):
    """
    Decides what happens with properties without a value:
    "omit" doesn't write the property, "null" writes a json null
    """

    def __init__(self, policy="omit", overrides=None):
        """
        :param policy: default policy
        :param overrides: policy per property name
        """
        overrides = dict(overrides or {})
        for name, prop_policy in [(None, policy)] + list(overrides.items()):
            if prop_policy not in NULL_POLICIES:
                raise ConfigurationError(f"Invalid null policy {prop_policy!r} for {name or 'all properties'}, use one of {NULL_POLICIES}")
        self.policy = policy
        self.overrides = overrides

    def policy_for(self, property_name) -> str:
        return self.overrides.get(property_name, self.policy)

    def __call__(self, property_name, value, out, downstream):
        if value is not None or self.policy_for(property_name) == "omit":
            return downstream.encode(property_name, value, out)
        if property_name is not None:
            out.write_field_name(property_name)
        out.write_null()
        return True


class ExcludeFilter(EncoderFilter):
    """
    Suppresses the named properties
    """

    def __init__(self, names, entity_names=None):
        """
        :param names: property names to suppress
        :param entity_names: limit the filter to these resource entities, all entities if None
        """
        self.names = frozenset(names)
        self.entity_names = frozenset(entity_names) if entity_names is not None else None

    def matches(self, resource_entity):
        if self.entity_names is None:
            return True
        return resource_entity is not None and resource_entity.name in self.entity_names

    def __call__(self, property_name, value, out, downstream):
        if property_name in self.names:
            return False
        return downstream.encode(property_name, value, out)


class RedactionFilter(ExcludeFilter):
    """
    Writes a replacement string instead of the value of the named properties,
    properties without a value are left alone
    """

    def __init__(self, names, replacement="***", entity_names=None):
        super().__init__(names, entity_names)
        self.replacement = replacement

    def __call__(self, property_name, value, out, downstream):
        if property_name not in self.names or value is None:
            return downstream.encode(property_name, value, out)
        # the downstream encoder may not accept a string
        if property_name is not None:
            out.write_field_name(property_name)
        out.write_string(self.replacement)
        return True
