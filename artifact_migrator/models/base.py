"""Base models for artifact-migrator."""

from pydantic import BaseModel, ConfigDict


class MigratorBaseModel(BaseModel):
    """Base model for all artifact-migrator domain models."""

    model_config = ConfigDict(
        extra="forbid",  # Don't allow extra fields
        frozen=False,  # Allow modification (can be changed per model)
        validate_assignment=True,  # Validate on attribute assignment
    )


__all__ = ["MigratorBaseModel"]
