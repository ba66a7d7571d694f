from dataclasses import dataclass, field, asdict
from datetime import datetime
from typing import Optional, List


@dataclass(frozen=True)
class HeroDefinition:
    """A validated hero payload that has not been stored yet."""
    name: str
    description: str
    model_name: str
    system_prompt: Optional[str] = None
    avatar_url: Optional[str] = None


@dataclass
class Hero:
    id: str
    name: str
    description: str
    model_name: str
    created_at: datetime
    updated_at: datetime
    system_prompt: Optional[str] = None
    avatar_url: Optional[str] = None

    def definition(self) -> HeroDefinition:
        return HeroDefinition(
            name=self.name,
            description=self.description,
            model_name=self.model_name,
            system_prompt=self.system_prompt,
            avatar_url=self.avatar_url,
        )

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class ExternalModelRequest:
    model: str
    base_model: str
    system: str

    def to_payload(self) -> dict:
        return {"model": self.model, "from": self.base_model, "system": self.system}


@dataclass(frozen=True)
class ProvisionedModel:
    model_name: str


@dataclass
class ChatMessage:
    id: str
    conversation_id: str
    role: str
    content: str
    created_at: datetime


@dataclass
class Conversation:
    id: str
    user_id: str
    hero: Hero
    title: Optional[str]
    created_at: datetime
    updated_at: datetime
    messages: List[ChatMessage] = field(default_factory=list)
    last_message: Optional[ChatMessage] = None
