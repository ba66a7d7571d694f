from abc import ABC, abstractmethod

from hero_api.provisioning.context import ProvisioningContext, ProvisioningState


class ProvisioningStage(ABC):
    name: str
    state: ProvisioningState

    @abstractmethod
    def run(self, context: ProvisioningContext) -> None:
        """
        Must:
        - read from context
        - write to context
        - NEVER call other stages
        - leave context.state terminal to stop the workflow
        """
        pass
