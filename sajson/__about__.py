__version__ = "0.3.0"
__description__ = "sajson : SqlAlchemy entity to JSON encoding"
