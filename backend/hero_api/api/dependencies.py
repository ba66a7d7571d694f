from functools import lru_cache

from fastapi import Depends
from sqlalchemy.orm import Session

from hero_api.chat.service import ChatService
from hero_api.db.session import get_db
from hero_api.llm.client import OllamaClient
from hero_api.provisioning import HeroProvisioningController, ModelProvisioner, ProvisionerConfig
from hero_api.repository.conversations import ConversationRepository
from hero_api.repository.heroes import SqlHeroRepository


@lru_cache(maxsize=1)
def get_ollama_client() -> OllamaClient:
    # one client, one pooled requests.Session for the whole process
    return OllamaClient()


def get_hero_repository(db: Session = Depends(get_db)) -> SqlHeroRepository:
    return SqlHeroRepository(db)


def get_conversation_repository(db: Session = Depends(get_db)) -> ConversationRepository:
    return ConversationRepository(db)


def get_provisioning_controller(
    repository: SqlHeroRepository = Depends(get_hero_repository),
    client: OllamaClient = Depends(get_ollama_client),
) -> HeroProvisioningController:
    provisioner = ModelProvisioner(client, ProvisionerConfig.from_env())
    return HeroProvisioningController(repository, provisioner)


def get_chat_service(
    conversations: ConversationRepository = Depends(get_conversation_repository),
    client: OllamaClient = Depends(get_ollama_client),
) -> ChatService:
    return ChatService(conversations, client)
