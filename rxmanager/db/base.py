# rxmanager/db/base.py
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """All tables (medicines, prescriptions, lines) inherit from this."""
    pass
