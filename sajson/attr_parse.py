import datetime
import decimal
import sajson
from .categories import Category
from .errors import ValidationError
from .type_resolver import get_python_type

DATETIME_FORMATS = ("%Y-%m-%dT%H:%M:%S.%f", "%Y-%m-%dT%H:%M:%S", "%Y-%m-%d %H:%M:%S.%f", "%Y-%m-%d %H:%M:%S")
TIME_FORMATS = ("%H:%M:%S.%f", "%H:%M:%S")
TRUE_STRINGS = ("true", "1")
FALSE_STRINGS = ("false", "0")


def _strptime(attr_val, formats, attr_name):
    date_str = str(attr_val)
    for fmt in formats:
        try:
            return datetime.datetime.strptime(date_str, fmt)
        except ValueError:
            continue
    raise ValidationError(f'Invalid value "{attr_val}" for {attr_name}')


def parse_attr(attribute, attr_val):
    """
    Parse the json attribute value `attr_val` so it can be assigned to the instance attribute.
    The attribute category decides the accepted representations, these are the representations
    written by the encoders (and a few common variants)

    :param attribute: AttributeDescriptor
    :param attr_val: json attribute value
    :return: processed value
    """
    if attr_val is None:
        return attr_val

    category = attribute.category
    if category == Category.DATETIME:
        if isinstance(attr_val, datetime.datetime):
            return attr_val
        return _strptime(attr_val, DATETIME_FORMATS, attribute.name)

    if category == Category.DATE:
        if isinstance(attr_val, datetime.date) and not isinstance(attr_val, datetime.datetime):
            return attr_val
        return _strptime(attr_val, ("%Y-%m-%d",), attribute.name).date()

    if category == Category.TIME:
        if isinstance(attr_val, datetime.time):
            return attr_val
        return _strptime(attr_val, TIME_FORMATS, attribute.name).time()

    if category == Category.BOOLEAN:
        if isinstance(attr_val, bool):
            return attr_val
        if str(attr_val).lower() in TRUE_STRINGS:
            return True
        if str(attr_val).lower() in FALSE_STRINGS:
            return False
        raise ValidationError(f'Invalid boolean "{attr_val}" for {attribute.name}')

    if category == Category.NUMERIC:
        if isinstance(attr_val, bool):
            raise ValidationError(f'Invalid number "{attr_val}" for {attribute.name}')
        python_type = get_python_type(attribute.value_type)
        if python_type is None or not issubclass(python_type, (int, float, decimal.Decimal)):
            # numeric sql type hint without a python type
            python_type = float if isinstance(attr_val, float) or "." in str(attr_val) else int
        try:
            if issubclass(python_type, decimal.Decimal):
                # from the text so 0.1 doesn't become 0.1000000000000000055...
                return python_type(str(attr_val))
            result = python_type(attr_val)
        except (ValueError, TypeError, decimal.InvalidOperation) as exc:
            raise ValidationError(f'Invalid number "{attr_val}" for {attribute.name}: {exc}')
        if issubclass(python_type, int) and result != attr_val and not isinstance(attr_val, str):
            raise ValidationError(f'Invalid integer "{attr_val}" for {attribute.name}')
        return result

    if category == Category.STRING:
        python_type = get_python_type(attribute.value_type)
        if python_type is not None and python_type is not str:
            # eg. uuid.UUID or enum types
            try:
                return python_type(attr_val)
            except (ValueError, TypeError) as exc:
                raise ValidationError(f'Invalid value "{attr_val}" for {attribute.name}: {exc}')
        return str(attr_val)

    # leave the other types (eg. json columns) alone
    sajson.log.debug(f"No parsing for {attribute.name} ({category})")
    return attr_val
