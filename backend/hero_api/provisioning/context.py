from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional

from hero_api.domain import Hero, HeroDefinition, ProvisionedModel
from hero_api.errors import ProvisionError, ValidationError


class ProvisioningState(Enum):
    VALIDATING = "validating"
    PERSISTING = "persisting"
    PROVISIONING = "provisioning"
    RECONCILING = "reconciling"

    # terminal
    COMPLETED = "completed"
    DEGRADED = "degraded"
    REJECTED = "rejected"

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_STATES


TERMINAL_STATES = {
    ProvisioningState.COMPLETED,
    ProvisioningState.DEGRADED,
    ProvisioningState.REJECTED,
}


@dataclass
class ProvisioningContext:
    # Raw input (authoritative)
    payload: Any

    state: ProvisioningState = ProvisioningState.VALIDATING
    history: List[ProvisioningState] = field(
        default_factory=lambda: [ProvisioningState.VALIDATING]
    )

    definition: Optional[HeroDefinition] = None
    hero: Optional[Hero] = None
    provisioned: Optional[ProvisionedModel] = None
    provision_error: Optional[ProvisionError] = None

    errors: List[ValidationError] = field(default_factory=list)
    warning: Optional[str] = None
    writes: int = 0

    def move_to(self, state: ProvisioningState):
        self.state = state
        self.history.append(state)
