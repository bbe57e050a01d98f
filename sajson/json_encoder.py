# sajson to json encoding of values without a dedicated attribute encoder

import datetime
import decimal
import enum
import json
from uuid import UUID
import sajson
from .config import is_debug


class SAJSONEncoder(json.JSONEncoder):
    """
    JSON encoding for common python types
    """

    # pylint: disable=too-many-return-statements,arguments-differ,method-hidden
    def default(self, obj, **kwargs):
        """
        override the default json encoding
        :param obj: object to be encoded
        :return: encoded/serialized object
        """
        if isinstance(obj, datetime.timedelta):
            return str(obj)
        if isinstance(obj, datetime.datetime):
            return obj.isoformat(" ")
        if isinstance(obj, (datetime.date, datetime.time)):
            return obj.isoformat()
        if isinstance(obj, (set, frozenset)):
            return list(obj)
        if isinstance(obj, UUID):
            return str(obj)
        if isinstance(obj, enum.Enum):
            return obj.value
        if isinstance(obj, decimal.Decimal):
            return float(obj)
        if isinstance(obj, bytes):
            if obj == b"":
                return ""
            sajson.log.debug("SAJSONEncoder: serializing bytes obj")
            return obj.hex()

        # We shouldn't get here in a normal setup:
        # the attribute should have been configured with an encoder override
        if not is_debug():
            sajson.log.warning(f'JSON Encoding Error: Unknown object type "{type(obj)}" for {obj!r}')
            return super().default(obj)

        return self.ghetto_encode(obj)

    @staticmethod
    def ghetto_encode(obj):
        """
        if everything else failed, try to encode the public obj attributes
        i.e. those attributes without a _ prefix
        :param obj: object to be encoded
        :return: encoded/serialized object
        """
        try:
            result = {}
            for k, v in vars(obj).items():
                if not k.startswith("_"):
                    if isinstance(v, (int, float)) or v is None:
                        result[k] = v
                    else:
                        result[k] = str(v)
        except TypeError:
            result = str(obj)
        return result
