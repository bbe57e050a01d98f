"""
Attribute categories: the resolved semantic kind of an attribute value, used to select its encoder
"""
import enum


class Category(enum.Enum):
    DATE = "date"
    TIME = "time"
    DATETIME = "datetime"
    STRING = "string"
    NUMERIC = "numeric"
    BOOLEAN = "boolean"
    RELATIONSHIP = "relationship"
    METADATA = "metadata"
    OTHER = "other"

    @property
    def is_temporal(self) -> bool:
        return self in TEMPORAL_CATEGORIES


TEMPORAL_CATEGORIES = frozenset((Category.DATE, Category.TIME, Category.DATETIME))

#
# Map (legacy) SQL column type names to categories
# The names are matched in uppercase, they can come from a string hint or from
# the __visit_name__ of a SQLAlchemy type
# If a name isn't found in the table, the hint is ignored
#
SQL_TYPE_CATEGORY = {
    "DATE": Category.DATE,
    "TIME": Category.TIME,
    "TIMESTAMP": Category.DATETIME,
    "DATETIME": Category.DATETIME,
    "INTEGER": Category.NUMERIC,
    "SMALLINT": Category.NUMERIC,
    "SMALL_INTEGER": Category.NUMERIC,
    "BIGINT": Category.NUMERIC,
    "BIG_INTEGER": Category.NUMERIC,
    "TINYINT": Category.NUMERIC,
    "MEDIUMINT": Category.NUMERIC,
    "NUMERIC": Category.NUMERIC,
    "DECIMAL": Category.NUMERIC,
    "FLOAT": Category.NUMERIC,
    "REAL": Category.NUMERIC,
    "DOUBLE": Category.NUMERIC,
    "YEAR": Category.NUMERIC,
    "BOOLEAN": Category.BOOLEAN,
    "BIT": Category.BOOLEAN,
    "VARCHAR": Category.STRING,
    "NVARCHAR": Category.STRING,
    "CHAR": Category.STRING,
    "STRING": Category.STRING,
    "UNICODE": Category.STRING,
    "TEXT": Category.STRING,
    "UNICODE_TEXT": Category.STRING,
    "TINYTEXT": Category.STRING,
    "MEDIUMTEXT": Category.STRING,
    "LONGTEXT": Category.STRING,
    "ENUM": Category.STRING,
    "UUID": Category.STRING,
}
