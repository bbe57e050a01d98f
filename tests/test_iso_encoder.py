"""
ISO 8601 formatting of temporal attributes: the format depends on the declared value type
of the attribute, not on the sql column type nor on the type of the stored value
"""
import datetime
import time
from types import SimpleNamespace

import pytest

from sajson import AttributeDescriptor, AttributeEncoderFactory, DataError, EncoderService, LegacyTimestamp, ResourceEntity
from conftest import EPOCH_MILLIS, EPOCH_MILLIS_WITH_FRACTION, local_datetime, iso

DATE_TIME_PATTERN = "%Y-%m-%dT%H:%M:%S"


def _entity(*attributes):
    return ResourceEntity("TestEntity", [AttributeDescriptor(*attr) for attr in attributes])


@pytest.mark.parametrize("millis, with_millis", [(EPOCH_MILLIS, False), (EPOCH_MILLIS_WITH_FRACTION, True)])
def test_datetime_attribute_ignores_sql_type(encoder_service, millis, with_millis):
    # a datetime attribute is always formatted as a local date-time, whatever the column type
    resource_entity = _entity(
        ("date", datetime.datetime, "DATE"),
        ("dateTime", datetime.datetime, None),
        ("time", datetime.datetime, "TIME"),
        ("timestamp", datetime.datetime, "TIMESTAMP"),
    )
    value = local_datetime(millis)
    obj = SimpleNamespace(date=value, dateTime=value, time=value, timestamp=value)
    date_string = iso(value, DATE_TIME_PATTERN, with_millis)

    assert encoder_service.to_json(resource_entity, [obj]) == (
        '{"data":[{'
        f'"date":"{date_string}",'
        f'"dateTime":"{date_string}",'
        f'"time":"{date_string}",'
        f'"timestamp":"{date_string}"'
        '}],"total":1}'
    )


def test_date_attribute(encoder_service):
    resource_entity = _entity(("date", datetime.date, "DATE"))
    value = local_datetime(EPOCH_MILLIS).date()

    expected = iso(value, "%Y-%m-%d")
    assert encoder_service.to_json(resource_entity, [SimpleNamespace(date=value)]) == f'{{"data":[{{"date":"{expected}"}}],"total":1}}'


@pytest.mark.parametrize("sql_type", ["DATE", "TIME", "TIMESTAMP", None])
def test_date_attribute_ignores_sql_type(encoder_service, sql_type):
    resource_entity = _entity(("date", datetime.date, sql_type))
    expected = iso(local_datetime(EPOCH_MILLIS), "%Y-%m-%d")

    result = encoder_service.to_json(resource_entity, [SimpleNamespace(date=EPOCH_MILLIS)])
    assert result == f'{{"data":[{{"date":"{expected}"}}],"total":1}}'


@pytest.mark.parametrize("millis, with_millis", [(EPOCH_MILLIS, False), (EPOCH_MILLIS_WITH_FRACTION, True)])
def test_time_attribute(encoder_service, millis, with_millis):
    resource_entity = _entity(("time", datetime.time, "TIME"))
    value = local_datetime(millis).time()

    expected = iso(local_datetime(millis), "%H:%M:%S", with_millis)
    assert encoder_service.to_json(resource_entity, [SimpleNamespace(time=value)]) == f'{{"data":[{{"time":"{expected}"}}],"total":1}}'


@pytest.mark.parametrize("millis, with_millis", [(EPOCH_MILLIS, False), (EPOCH_MILLIS_WITH_FRACTION, True)])
def test_timestamp_attribute(encoder_service, millis, with_millis):
    resource_entity = _entity(("dateTime", datetime.datetime, None), ("timestamp", datetime.datetime, "TIMESTAMP"))
    obj = SimpleNamespace(dateTime=millis, timestamp=local_datetime(millis))

    expected = iso(local_datetime(millis), DATE_TIME_PATTERN, with_millis)
    assert encoder_service.to_json(resource_entity, [obj]) == f'{{"data":[{{"dateTime":"{expected}","timestamp":"{expected}"}}],"total":1}}'


def test_same_instant_same_output_for_all_representations(encoder_service):
    # datetime, epoch millis and the legacy timestamp type produce identical output
    value = local_datetime(EPOCH_MILLIS_WITH_FRACTION)
    representations = [value, EPOCH_MILLIS_WITH_FRACTION]
    value_types = [datetime.datetime, LegacyTimestamp, LegacyTimestamp()]

    results = set()
    for value_type in value_types:
        for sql_type in ("TIMESTAMP", "DATETIME", None, "VARCHAR"):
            resource_entity = _entity(("at", value_type, sql_type))
            for representation in representations:
                results.add(encoder_service.to_json(resource_entity, [SimpleNamespace(at=representation)]))

    assert results == {f'{{"data":[{{"at":"{iso(value, DATE_TIME_PATTERN, True)}"}}],"total":1}}'}


@pytest.mark.parametrize(
    "sql_type, pattern",
    [("DATE", "%Y-%m-%d"), ("TIME", "%H:%M:%S"), ("TIMESTAMP", DATE_TIME_PATTERN), (None, DATE_TIME_PATTERN)],
)
def test_legacy_timestamp_uses_sql_type(encoder_service, sql_type, pattern):
    resource_entity = _entity(("at", LegacyTimestamp, sql_type))

    expected = iso(local_datetime(EPOCH_MILLIS), pattern)
    assert encoder_service.to_json(resource_entity, [SimpleNamespace(at=EPOCH_MILLIS)]) == f'{{"data":[{{"at":"{expected}"}}],"total":1}}'


@pytest.mark.parametrize(
    "microsecond, expected",
    [(0, "10:00:47"), (999, "10:00:47"), (1000, "10:00:47.001"), (123456, "10:00:47.123"), (999999, "10:00:47.999")],
)
def test_fractional_seconds(microsecond, expected):
    encoder = AttributeEncoderFactory().encoder_for(AttributeDescriptor("t", datetime.time).category)
    service = EncoderService()
    value = datetime.datetime(2016, 3, 26, 10, 0, 47, microsecond)

    assert encoder.format(value) == expected
    resource_entity = _entity(("at", datetime.datetime))
    assert service.to_json(resource_entity, [SimpleNamespace(at=value)]) == f'{{"data":[{{"at":"2016-03-26T{expected}"}}],"total":1}}'


def test_utc_timezone():
    service = EncoderService(attribute_encoder_factory=AttributeEncoderFactory(timezone="UTC"))
    resource_entity = _entity(("at", datetime.datetime), ("day", datetime.date))

    assert service.to_json(resource_entity, [SimpleNamespace(at=EPOCH_MILLIS, day=EPOCH_MILLIS)]) == (
        '{"data":[{"at":"2016-03-26T12:27:27","day":"2016-03-26"}],"total":1}'
    )
    assert service.to_json(resource_entity, [SimpleNamespace(at=EPOCH_MILLIS_WITH_FRACTION)]) == (
        '{"data":[{"at":"2016-03-26T12:27:27.001"}],"total":1}'
    )


@pytest.fixture
def brussels_tz(monkeypatch):
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset is not available")
    monkeypatch.setenv("TZ", "Europe/Brussels")
    time.tzset()
    yield
    monkeypatch.undo()
    time.tzset()


def test_configured_timezone_same_instant_same_output(brussels_tz):
    service = EncoderService(attribute_encoder_factory=AttributeEncoderFactory(timezone="UTC"))
    resource_entity = _entity(("at", datetime.datetime))
    # naive values are system local time, as stored by LegacyTimestamp
    naive_local = datetime.datetime.fromtimestamp(EPOCH_MILLIS / 1000)
    assert naive_local.hour == 13
    aware = datetime.datetime(2016, 3, 26, 12, 27, 27, tzinfo=datetime.timezone.utc)

    expected = '{"data":[{"at":"2016-03-26T12:27:27"}],"total":1}'
    for value in (EPOCH_MILLIS, naive_local, aware):
        assert service.to_json(resource_entity, [SimpleNamespace(at=value)]) == expected


def test_aware_datetime_is_converted():
    utc_value = datetime.datetime(2016, 3, 26, 10, 0, 47, tzinfo=datetime.timezone.utc)
    resource_entity = _entity(("at", datetime.datetime))

    utc_service = EncoderService(attribute_encoder_factory=AttributeEncoderFactory(timezone=datetime.timezone.utc))
    assert utc_service.to_json(resource_entity, [SimpleNamespace(at=utc_value)]) == '{"data":[{"at":"2016-03-26T10:00:47"}],"total":1}'

    plus_two = datetime.timezone(datetime.timedelta(hours=2))
    service = EncoderService(attribute_encoder_factory=AttributeEncoderFactory(timezone=plus_two))
    assert service.to_json(resource_entity, [SimpleNamespace(at=utc_value)]) == '{"data":[{"at":"2016-03-26T12:00:47"}],"total":1}'


def test_time_value_in_datetime_attribute(encoder_service):
    resource_entity = _entity(("at", datetime.datetime))
    obj = SimpleNamespace(at=datetime.time(10, 0, 47, 1000))

    assert encoder_service.to_json(resource_entity, [obj]) == '{"data":[{"at":"1970-01-01T10:00:47.001"}],"total":1}'


@pytest.mark.parametrize("value", ["2016-03-26", True, object()])
def test_invalid_temporal_value(encoder_service, value):
    resource_entity = _entity(("date", datetime.date))

    with pytest.raises(DataError):
        encoder_service.to_json(resource_entity, [SimpleNamespace(date=value)])
