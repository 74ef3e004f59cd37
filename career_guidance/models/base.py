from sqlalchemy.orm import as_declarative


@as_declarative()
class Base:
    """Base class for SQLAlchemy models, each model names its own table"""
