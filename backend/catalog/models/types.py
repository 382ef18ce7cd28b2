"""Custom column types"""
from sqlalchemy import String
from sqlalchemy.types import TypeDecorator


class GenreList(TypeDecorator):
    """
    List of genre tags stored as one comma-separated text column.

    An empty list is stored as an empty string and read back as ``[]``;
    ``NULL`` stays ``None``.
    """

    impl = String
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return ",".join(value)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        if value == "":
            return []
        return value.split(",")
