"""
Hero provisioning workflow: persist a hero and build its custom model in Ollama.
"""

from hero_api.provisioning.context import ProvisioningContext, ProvisioningState
from hero_api.provisioning.controller import HeroProvisioningController
from hero_api.provisioning.provisioner import (
    ModelProvisioner,
    ProvisionerConfig,
    derive_model_name,
    effective_system_prompt,
)

__all__ = [
    "HeroProvisioningController",
    "ModelProvisioner",
    "ProvisionerConfig",
    "ProvisioningContext",
    "ProvisioningState",
    "derive_model_name",
    "effective_system_prompt",
]
