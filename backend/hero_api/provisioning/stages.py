import logging

from hero_api.errors import ProvisionError, StorageError
from hero_api.provisioning.context import ProvisioningContext, ProvisioningState
from hero_api.provisioning.provisioner import ModelProvisioner
from hero_api.provisioning.stage import ProvisioningStage
from hero_api.repository.base import HeroRepository
from hero_api.validation import validate_hero_definition

logger = logging.getLogger(__name__)

DEGRADED_WARNING = "Hero created in database, but failed to create custom Ollama model"


class ValidationStage(ProvisioningStage):
    name = "validation"
    state = ProvisioningState.VALIDATING

    def run(self, context: ProvisioningContext) -> None:
        result = validate_hero_definition(context.payload)

        if not result.is_valid:
            context.errors.extend(result.errors)
            context.move_to(ProvisioningState.REJECTED)
            return

        context.definition = result.definition


class PersistStage(ProvisioningStage):
    name = "persist"
    state = ProvisioningState.PERSISTING

    def __init__(self, repository: HeroRepository):
        self.repository = repository

    def run(self, context: ProvisioningContext) -> None:
        try:
            context.hero = self.repository.create(context.definition)
        except StorageError:
            context.move_to(ProvisioningState.REJECTED)
            raise

        context.writes += 1


class ProvisionStage(ProvisioningStage):
    name = "provision"
    state = ProvisioningState.PROVISIONING

    def __init__(self, provisioner: ModelProvisioner):
        self.provisioner = provisioner

    def run(self, context: ProvisioningContext) -> None:
        hero = context.hero
        try:
            context.provisioned = self.provisioner.provision(
                hero_id=hero.id,
                base_model=hero.model_name,
                system_prompt=hero.system_prompt,
                description=hero.description,
                hero_name=hero.name,
            )
        except ProvisionError as e:
            # recovered in ReconcileStage
            context.provision_error = e


class ReconcileStage(ProvisioningStage):
    name = "reconcile"
    state = ProvisioningState.RECONCILING

    def __init__(self, repository: HeroRepository):
        self.repository = repository

    def run(self, context: ProvisioningContext) -> None:
        if context.provisioned is None:
            logger.warning(
                "Hero %s kept base model %s: %s",
                context.hero.id,
                context.hero.model_name,
                context.provision_error,
            )
            context.warning = DEGRADED_WARNING
            context.move_to(ProvisioningState.DEGRADED)
            return

        # NotFoundError here means the row vanished between writes; let it propagate
        context.hero = self.repository.update_model_name(
            context.hero.id, context.provisioned.model_name
        )
        context.writes += 1
        context.move_to(ProvisioningState.COMPLETED)
