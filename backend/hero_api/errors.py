from dataclasses import dataclass
from typing import List, Optional


@dataclass
class ValidationError:
    field: str
    reason: str

    def to_dict(self) -> dict:
        return {"field": self.field, "reason": self.reason}


class HeroError(Exception):
    """Base class for errors raised by the hero workflows."""


class ValidationFailed(HeroError):
    def __init__(self, errors: List[ValidationError]):
        self.errors = errors
        super().__init__(
            "; ".join(f"{e.field}: {e.reason}" for e in errors) or "invalid input"
        )


class StorageError(HeroError):
    """The database rejected or failed a read/write."""


class NotFoundError(HeroError):
    def __init__(self, entity: str, entity_id: str):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} not found: {entity_id}")


class ProvisionError(HeroError):
    """
    The model runtime did not create the hero model.

    `model_name` keeps the derived name so a caller can retry or report it.
    """

    def __init__(self, cause: str, model_name: Optional[str] = None):
        self.cause = cause
        self.model_name = model_name
        super().__init__(cause)


class RuntimeUnavailable(HeroError):
    """The model runtime failed to answer a chat request."""
