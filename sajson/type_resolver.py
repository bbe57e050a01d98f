"""
Attribute type resolution

The category of an attribute is decided by its declared value type, the (legacy) sql type hint
is only used when the value type is ambiguous or unknown:

    resolve(datetime.date, "TIMESTAMP") => Category.DATE
    resolve(LegacyTimestamp, "TIME") => Category.TIME
    resolve(LegacyTimestamp, None) => Category.DATETIME
    resolve(None, "VARCHAR") => Category.STRING

Resolution never fails, unknown types end up in Category.OTHER
"""
import datetime
import decimal
import enum
import uuid
import sajson
from sqlalchemy.types import TypeEngine
from .categories import Category, SQL_TYPE_CATEGORY
from .types import is_ambiguous_temporal
from typing import Any, Optional

# Checked in order: datetime.datetime is a subclass of datetime.date and bool is a subclass of int
PYTHON_TYPE_CATEGORY = (
    (datetime.datetime, Category.DATETIME),
    (datetime.date, Category.DATE),
    (datetime.time, Category.TIME),
    (bool, Category.BOOLEAN),
    ((int, float, decimal.Decimal), Category.NUMERIC),
    ((str, uuid.UUID, enum.Enum), Category.STRING),
)


def resolve(value_type: Any, sql_type_hint: Any = None) -> Category:
    """
    :param value_type: declared value type: python type, SQLAlchemy type (class or instance), Category or None
    :param sql_type_hint: legacy sql type: name, SQLAlchemy type or enum member
    :return: attribute Category
    """
    if isinstance(value_type, Category):
        return value_type

    if is_ambiguous_temporal(value_type):
        category = hint_category(sql_type_hint)
        if category is not None and category.is_temporal:
            return category
        return Category.DATETIME

    python_type = get_python_type(value_type)
    if python_type is not None:
        for types, category in PYTHON_TYPE_CATEGORY:
            if issubclass(python_type, types):
                return category

    category = hint_category(sql_type_hint)
    if category is None:
        sajson.log.debug(f"No category for value type {value_type} (sql type {sql_type_hint}), using {Category.OTHER}")
        return Category.OTHER
    return category


def get_python_type(value_type: Any) -> Optional[type]:
    """
    :param value_type: python type or SQLAlchemy type
    :return: the python type or None if it can't be determined
    """
    if value_type is None:
        return None

    if isinstance(value_type, type) and issubclass(value_type, TypeEngine):
        try:
            value_type = value_type()
        except TypeError:
            # type requires constructor arguments (eg. Enum)
            return None

    if isinstance(value_type, TypeEngine):
        try:
            return value_type.python_type
        except NotImplementedError:
            # custom types don't have to implement python_type
            return None

    if isinstance(value_type, type):
        return value_type

    return None


def hint_name(sql_type_hint: Any) -> Optional[str]:
    """
    :param sql_type_hint: sql type name, SQLAlchemy type or enum member
    :return: uppercase sql type name
    """
    if sql_type_hint is None:
        return None
    if isinstance(sql_type_hint, str):
        return sql_type_hint.upper()
    if isinstance(sql_type_hint, enum.Enum):
        return sql_type_hint.name.upper()
    # TypeDecorators wrap the actual column type
    impl = getattr(sql_type_hint, "impl", None)
    if impl is not None and not isinstance(impl, property):
        sql_type_hint = impl
    name = getattr(sql_type_hint, "__visit_name__", None)
    if isinstance(name, str):
        return name.upper()
    return None


def hint_category(sql_type_hint: Any) -> Optional[Category]:
    """
    :param sql_type_hint: sql type name, SQLAlchemy type or enum member
    :return: Category or None when the hint is absent or unrecognized
    """
    return SQL_TYPE_CATEGORY.get(hint_name(sql_type_hint))
