import logging
import re
from dataclasses import dataclass
from typing import Optional

from hero_api import config
from hero_api.domain import ExternalModelRequest, ProvisionedModel
from hero_api.errors import ProvisionError
from hero_api.llm.client import OllamaClient, OllamaError

logger = logging.getLogger(__name__)

MODEL_PREFIX = "hero-"
_INVALID_MODEL_CHARS = re.compile(r"[^a-z0-9\-_]")


@dataclass(frozen=True)
class ProvisionerConfig:
    default_base_model: str = "llama3.2:latest"
    prompt_template: str = "You are {name}, {description}"
    fallback_description: str = "a helpful AI assistant."

    @classmethod
    def from_env(cls) -> "ProvisionerConfig":
        return cls(
            default_base_model=config.DEFAULT_BASE_MODEL,
            prompt_template=config.DEFAULT_SYSTEM_PROMPT_TEMPLATE,
            fallback_description=config.DEFAULT_HERO_DESCRIPTION,
        )


def derive_model_name(hero_id: str) -> str:
    """
    Runtime model name for a hero.
    Pure: the same id always gives the same name, so it can be recomputed later.
    """
    return MODEL_PREFIX + _INVALID_MODEL_CHARS.sub("-", hero_id.lower())


def effective_system_prompt(
    system_prompt: Optional[str],
    hero_name: str,
    description: Optional[str],
    cfg: ProvisionerConfig = ProvisionerConfig(),
) -> str:
    if isinstance(system_prompt, str) and system_prompt:
        return system_prompt

    return cfg.prompt_template.format(
        name=hero_name,
        description=description or cfg.fallback_description,
    )


class ModelProvisioner:
    def __init__(self, client: OllamaClient, cfg: Optional[ProvisionerConfig] = None):
        self.client = client
        self.config = cfg or ProvisionerConfig.from_env()

    def build_request(
        self,
        hero_id: str,
        base_model: Optional[str],
        system_prompt: Optional[str],
        description: Optional[str],
        hero_name: str,
    ) -> ExternalModelRequest:
        return ExternalModelRequest(
            model=derive_model_name(hero_id),
            base_model=base_model or self.config.default_base_model,
            system=effective_system_prompt(
                system_prompt, hero_name, description, self.config
            ),
        )

    def provision(
        self,
        hero_id: str,
        base_model: Optional[str],
        system_prompt: Optional[str],
        description: Optional[str],
        hero_name: str,
    ) -> ProvisionedModel:
        request = self.build_request(
            hero_id, base_model, system_prompt, description, hero_name
        )

        # single attempt, no retries
        try:
            self.client.create_model(request.model, request.base_model, request.system)
        except OllamaError as e:
            raise ProvisionError(str(e), model_name=request.model) from e

        return ProvisionedModel(model_name=request.model)
