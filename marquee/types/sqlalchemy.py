from collections.abc import Callable

from sqlalchemy import types
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import DeclarativeBase, MappedAsDataclass

SessionLocalType = Callable[[], AsyncSession]

# Bounds of the `Integer` columns on PostgreSQL. SQLite accepts a wider range
INTEGER_MIN = -(2**31)
INTEGER_MAX = 2**31 - 1


class Base(MappedAsDataclass, DeclarativeBase):
    """Base class for all models.

    The type map is overriden so that every string is stored as a variable length string (see https://docs.sqlalchemy.org/en/20/orm/declarative_tables.html#customizing-the-type-map)"""

    type_annotation_map = {
        bool: types.Boolean(),
        int: types.Integer(),
        str: types.String(),
    }
