"""Import all models here so metadata.create_all sees every table."""

from accord.db.base_class import Base
from accord.models import compatibility  # noqa: F401

__all__ = ["Base"]
