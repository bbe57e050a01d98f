import datetime
import decimal
import enum
import uuid

import pytest
import sqlalchemy
from sqlalchemy.types import TypeDecorator

from sajson import Category, LegacyTimestamp, resolve
from sajson.type_resolver import hint_name


class Color(enum.Enum):
    RED = "red"


class SqlTypes(enum.Enum):
    DATE = 91
    TIME = 92
    TIMESTAMP = 93


class Opaque(TypeDecorator):
    impl = sqlalchemy.String
    cache_ok = True

    @property
    def python_type(self):
        raise NotImplementedError()


@pytest.mark.parametrize(
    "value_type, sql_type_hint, expected",
    [
        # the value type wins over the sql type
        (datetime.datetime, "DATE", Category.DATETIME),
        (datetime.datetime, "TIME", Category.DATETIME),
        (datetime.datetime, None, Category.DATETIME),
        (datetime.date, "TIMESTAMP", Category.DATE),
        (datetime.time, "TIMESTAMP", Category.TIME),
        (sqlalchemy.Date, sqlalchemy.DateTime, Category.DATE),
        (sqlalchemy.DateTime(), "TIME", Category.DATETIME),
        (sqlalchemy.TIMESTAMP, None, Category.DATETIME),
        (sqlalchemy.Time(), None, Category.TIME),
        # ambiguous value type: the sql type decides
        (LegacyTimestamp, "DATE", Category.DATE),
        (LegacyTimestamp, "date", Category.DATE),
        (LegacyTimestamp, sqlalchemy.Time, Category.TIME),
        (LegacyTimestamp(), SqlTypes.TIME, Category.TIME),
        (LegacyTimestamp, "TIMESTAMP", Category.DATETIME),
        (LegacyTimestamp, None, Category.DATETIME),
        (LegacyTimestamp, "VARCHAR", Category.DATETIME),
        (LegacyTimestamp, "NO_SUCH_TYPE", Category.DATETIME),
        # other types
        (bool, "INTEGER", Category.BOOLEAN),
        (int, None, Category.NUMERIC),
        (float, None, Category.NUMERIC),
        (decimal.Decimal, None, Category.NUMERIC),
        (sqlalchemy.Integer, None, Category.NUMERIC),
        (sqlalchemy.Numeric(10, 2), None, Category.NUMERIC),
        (sqlalchemy.Boolean, None, Category.BOOLEAN),
        (str, None, Category.STRING),
        (sqlalchemy.String(32), None, Category.STRING),
        (uuid.UUID, None, Category.STRING),
        (Color, None, Category.STRING),
        (bytes, None, Category.OTHER),
        (dict, None, Category.OTHER),
        # unknown value type: the sql type decides
        (None, "VARCHAR", Category.STRING),
        (None, "DATE", Category.DATE),
        (None, None, Category.OTHER),
        (Opaque, None, Category.OTHER),
        (Opaque(), "INTEGER", Category.NUMERIC),
        (object(), "NO_SUCH_TYPE", Category.OTHER),
        # already resolved
        (Category.METADATA, "DATE", Category.METADATA),
    ],
)
def test_resolve(value_type, sql_type_hint, expected):
    assert resolve(value_type, sql_type_hint) == expected


@pytest.mark.parametrize(
    "sql_type_hint, expected",
    [
        ("timestamp", "TIMESTAMP"),
        (sqlalchemy.TIMESTAMP, "TIMESTAMP"),
        (sqlalchemy.Date(), "DATE"),
        (sqlalchemy.BigInteger, "BIG_INTEGER"),
        (LegacyTimestamp(), "DATETIME"),
        (SqlTypes.DATE, "DATE"),
        (None, None),
        (42, None),
    ],
)
def test_hint_name(sql_type_hint, expected):
    assert hint_name(sql_type_hint) == expected
