import logging
from typing import Any

from hero_api.provisioning.context import ProvisioningContext, ProvisioningState
from hero_api.provisioning.provisioner import ModelProvisioner
from hero_api.provisioning.stages import (
    PersistStage,
    ProvisionStage,
    ReconcileStage,
    ValidationStage,
)
from hero_api.repository.base import HeroRepository

logger = logging.getLogger(__name__)


class HeroProvisioningController:
    """
    validate -> persist -> provision -> reconcile

    One or two repository writes once validation passes, never more.
    Nothing is retried and no transaction spans the database and the runtime.
    """

    def __init__(self, repository: HeroRepository, provisioner: ModelProvisioner):
        self.stages = [
            ValidationStage(),
            PersistStage(repository),
            ProvisionStage(provisioner),
            ReconcileStage(repository),
        ]

    def run(self, payload: Any) -> ProvisioningContext:
        context = ProvisioningContext(payload=payload)

        for stage in self.stages:
            if stage.state != context.state:
                context.move_to(stage.state)

            logger.info("Hero provisioning: %s", stage.name)
            stage.run(context)

            if context.state.is_terminal:
                break

        hero_id = context.hero.id if context.hero else None
        logger.info(
            "Hero provisioning finished: state=%s hero=%s writes=%d",
            context.state.value,
            hero_id,
            context.writes,
        )
        return context
