"""Import all models here for Alembic autogenerate."""

from reelnote.db.base_class import Base
from reelnote.models import credential  # noqa: F401

__all__ = ["Base"]
