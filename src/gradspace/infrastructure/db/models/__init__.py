"""Import all models so Base.metadata knows every table."""
from gradspace.infrastructure.db.models.preference import PreferenceModel

__all__ = [
    "PreferenceModel",
]
