# Custom column types
import datetime
from sqlalchemy.types import TypeDecorator, DateTime
from .errors import ValidationError


class LegacyTimestamp(TypeDecorator):
    """
    Timestamp column that historically held a date, a time or a date-time, depending on the
    column it was mapped to. The value type doesn't tell which one, so the resolver falls back
    to the sql type hint, eg.

        created = Column(LegacyTimestamp, info={"sql_type": "DATE"})

    Bound values may be datetime instances or epoch milliseconds
    """

    impl = DateTime
    cache_ok = True
    ambiguous_temporal = True  # checked by the type resolver

    def process_bind_param(self, value, dialect):
        if value is None or isinstance(value, datetime.datetime):
            return value
        if isinstance(value, bool):
            raise ValidationError(f"Invalid timestamp: '{value}'.")
        if isinstance(value, (int, float)):
            value = int(value)
            utc = datetime.datetime.fromtimestamp(value // 1000, tz=datetime.timezone.utc)
            return (utc + datetime.timedelta(milliseconds=value % 1000)).astimezone().replace(tzinfo=None)
        if isinstance(value, datetime.date):
            return datetime.datetime.combine(value, datetime.time())
        raise ValidationError(f"Invalid timestamp: '{value}'.")

    def process_result_value(self, value, dialect):
        return value


def is_ambiguous_temporal(value_type) -> bool:
    """
    :param value_type: declared attribute value type
    :return: whether the value type can hold a date, a time or a date-time
    """
    return getattr(value_type, "ambiguous_temporal", False) is True
