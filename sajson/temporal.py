"""
ISO 8601 encoders for temporal attributes.

The encoder is selected by the attribute category, not by the type of the stored value:
every supported value (datetime, date, time, epoch milliseconds) is first converted to a local
date-time and then formatted for the category

    date      yyyy-MM-dd                  2016-03-26
    time      HH:mm:ss[.SSS]              10:00:47, 10:00:47.001
    datetime  yyyy-MM-dd'T'HH:mm:ss[.SSS] 2016-03-26T10:00:47

The fractional part is only written when the millisecond of second isn't 0,
sub-millisecond precision is dropped.
"""
import datetime
import zoneinfo
from .encoders import ValueEncoder
from .errors import ConfigurationError, DataError

EPOCH_DATE = datetime.date(1970, 1, 1)


def get_timezone(timezone):
    """
    :param timezone: None (system default zone), tzinfo or zone name
    :return: tzinfo or None
    """
    if timezone is None or isinstance(timezone, datetime.tzinfo):
        return timezone
    if not isinstance(timezone, str):
        raise ConfigurationError(f"Invalid timezone {timezone!r}")
    if timezone.upper() in ("UTC", "Z"):
        return datetime.timezone.utc
    try:
        return zoneinfo.ZoneInfo(timezone)
    except (zoneinfo.ZoneInfoNotFoundError, ValueError) as exc:
        raise ConfigurationError(f"Unknown timezone {timezone!r}: {exc}")


def to_local_datetime(value, timezone=None) -> datetime.datetime:
    """
    :param value: datetime, date, time or epoch milliseconds
    :param timezone: tzinfo of the result, None for the system default zone
    :return: naive local datetime

    Naive datetimes are taken as system default zone values, like the ones LegacyTimestamp stores
    """
    if isinstance(value, datetime.datetime):
        if value.tzinfo is None and timezone is None:
            return value
        try:
            return value.astimezone(timezone).replace(tzinfo=None)
        except (OverflowError, OSError, ValueError) as exc:
            raise DataError(f"Can't convert {value!r} to {timezone}: {exc}")
    if isinstance(value, datetime.date):
        return datetime.datetime.combine(value, datetime.time())
    if isinstance(value, datetime.time):
        return datetime.datetime.combine(EPOCH_DATE, value.replace(tzinfo=None))
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        millis = int(value)
        try:
            utc = datetime.datetime.fromtimestamp(millis // 1000, tz=datetime.timezone.utc)
        except (OverflowError, OSError, ValueError) as exc:
            raise DataError(f"Epoch milliseconds out of range {value!r}: {exc}")
        utc += datetime.timedelta(milliseconds=millis % 1000)
        return utc.astimezone(timezone).replace(tzinfo=None)

    raise DataError(f"Can't convert {type(value).__name__} value {value!r} to a date-time")


def _timespec(value: datetime.datetime) -> str:
    # only whole milliseconds count
    return "milliseconds" if value.microsecond // 1000 else "seconds"


class TemporalEncoder(ValueEncoder):
    """
    Base class of the ISO encoders, the timezone is fixed when the encoder is created
    """

    def __init__(self, timezone=None):
        self.timezone = get_timezone(timezone)

    def encode_value(self, value, out):
        out.write_string(self.format(to_local_datetime(value, self.timezone)))

    def format(self, value: datetime.datetime) -> str:
        raise NotImplementedError  # pragma: no cover


class ISODateEncoder(TemporalEncoder):
    def format(self, value):
        return value.date().isoformat()


class ISOTimeEncoder(TemporalEncoder):
    def format(self, value):
        return value.time().isoformat(timespec=_timespec(value))


class ISODateTimeEncoder(TemporalEncoder):
    def format(self, value):
        return value.isoformat(timespec=_timespec(value))
