"""
Hero payload validation.

Turns an untyped JSON body into a HeroDefinition or a list of field errors.
Required fields are only checked for being non-empty strings; nothing is
trimmed and avatarUrl is not checked as a URI.
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictStr
from pydantic import ValidationError as PydanticValidationError

from hero_api.domain import HeroDefinition
from hero_api.errors import ValidationError


REQUIRED_MESSAGES = {
    "name": "Name is required",
    "description": "Description is required",
    "modelName": "Model is required",
}


class HeroDefinitionSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", protected_namespaces=())

    name: StrictStr = Field(min_length=1)
    description: StrictStr = Field(min_length=1)
    system_prompt: Optional[StrictStr] = Field(default=None, alias="systemPrompt")
    model_name: StrictStr = Field(min_length=1, alias="modelName")
    avatar_url: Optional[StrictStr] = Field(default=None, alias="avatarUrl")


# snake_case field name -> JSON name reported back to callers
_FIELD_ALIASES = {
    name: (info.alias or name)
    for name, info in HeroDefinitionSchema.model_fields.items()
}


@dataclass
class ValidationResult:
    is_valid: bool
    errors: List[ValidationError] = field(default_factory=list)
    definition: Optional[HeroDefinition] = None

    @classmethod
    def success(cls, definition: HeroDefinition):
        return cls(is_valid=True, errors=[], definition=definition)

    @classmethod
    def failure(cls, errors: List[ValidationError]):
        return cls(is_valid=False, errors=errors)


def _field_error(err: dict) -> ValidationError:
    loc = err.get("loc") or ("body",)
    field_name = _FIELD_ALIASES.get(str(loc[0]), str(loc[0]))

    if err.get("type") in {"missing", "string_too_short"} and field_name in REQUIRED_MESSAGES:
        return ValidationError(field=field_name, reason=REQUIRED_MESSAGES[field_name])

    return ValidationError(field=field_name, reason=err.get("msg", "Invalid value"))


def validate_hero_definition(raw: Any) -> ValidationResult:
    if not isinstance(raw, dict):
        return ValidationResult.failure(
            [ValidationError(field="body", reason="Expected a JSON object")]
        )

    try:
        parsed = HeroDefinitionSchema.model_validate(raw)
    except PydanticValidationError as e:
        return ValidationResult.failure([_field_error(err) for err in e.errors()])

    return ValidationResult.success(
        HeroDefinition(
            name=parsed.name,
            description=parsed.description,
            model_name=parsed.model_name,
            system_prompt=parsed.system_prompt,
            avatar_url=parsed.avatar_url,
        )
    )
