# /app/db/base_class.py

"""
The declarative Base every ORM model inherits from.

Table names default to the lower-cased class name plus an "s"
(`Student` -> `students`); models with irregular plurals set
`__tablename__` themselves.
"""

from sqlalchemy.orm import declarative_base, declared_attr


class CustomBase:
    @declared_attr
    def __tablename__(cls) -> str:
        return f"{cls.__name__.lower()}s"


Base = declarative_base(cls=CustomBase)
