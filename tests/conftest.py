import datetime
import pytest
from sqlalchemy import Column, Integer, String, Date, Time, DateTime, Boolean, ForeignKey
from sqlalchemy.orm import declarative_base, relationship

from sajson import EncoderService, LegacyTimestamp

# using pre-defined moments in time with and without fractional seconds
EPOCH_MILLIS = 1458995247000
EPOCH_MILLIS_WITH_FRACTION = 1458995247001

Base = declarative_base()


class Publisher(Base):
    __tablename__ = "Publishers"
    id = Column(Integer, primary_key=True)
    name = Column(String, default="")
    books = relationship("Book", back_populates="publisher")


class Book(Base):
    __tablename__ = "Books"
    id = Column(Integer, primary_key=True)
    title = Column(String, default="")
    published = Column(Date)
    publisher_id = Column(Integer, ForeignKey("Publishers.id"))
    publisher = relationship("Publisher", back_populates="books")
    user_id = Column(Integer, ForeignKey("Users.id"))
    user = relationship("User", back_populates="books")


class User(Base):
    __tablename__ = "Users"
    id = Column(Integer, primary_key=True)
    name = Column(String, default="")
    active = Column(Boolean)
    created = Column(LegacyTimestamp, info={"sql_type": "DATE"})
    last_login = Column(DateTime)
    alarm = Column(Time)
    books = relationship("Book", back_populates="user")


def local_datetime(millis):
    """
    :return: naive datetime in the system default zone
    """
    return datetime.datetime.fromtimestamp(millis // 1000) + datetime.timedelta(milliseconds=millis % 1000)


def iso(value, pattern, with_millis=False):
    result = value.strftime(pattern)
    if with_millis:
        result += f".{value.microsecond // 1000:03d}"
    return result


@pytest.fixture
def encoder_service():
    return EncoderService()
