from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse

from hero_api.api.auth import get_current_user
from hero_api.api.dependencies import (
    get_chat_service,
    get_conversation_repository,
    get_hero_repository,
    get_ollama_client,
)
from hero_api.api.serializers import serialize, serialize_conversation
from hero_api.chat.service import ChatService
from hero_api.db.models import User
from hero_api.errors import NotFoundError, RuntimeUnavailable, ValidationFailed
from hero_api.llm.client import OllamaClient
from hero_api.repository.conversations import ConversationRepository
from hero_api.repository.heroes import SqlHeroRepository
from hero_api.schemas import SendMessageRequest, StartConversationRequest

router = APIRouter(tags=["chat"])


@router.get("/heroes")
def list_heroes(
    user: User = Depends(get_current_user),
    repository: SqlHeroRepository = Depends(get_hero_repository),
):
    return serialize(repository.list())


@router.post("/conversations", status_code=201)
def start_conversation(
    request: StartConversationRequest,
    user: User = Depends(get_current_user),
    conversations: ConversationRepository = Depends(get_conversation_repository),
):
    try:
        conversation = conversations.create(user.id, request.hero_id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Hero not found")

    return serialize_conversation(conversation)


@router.get("/conversations")
def list_conversations(
    user: User = Depends(get_current_user),
    conversations: ConversationRepository = Depends(get_conversation_repository),
):
    return [serialize_conversation(c) for c in conversations.list_for_user(user.id)]


@router.get("/conversations/{conversation_id}")
def get_conversation(
    conversation_id: str,
    user: User = Depends(get_current_user),
    conversations: ConversationRepository = Depends(get_conversation_repository),
):
    conversation = conversations.get_for_user(conversation_id, user.id)
    if conversation is None:
        raise HTTPException(status_code=404, detail="Conversation not found")

    return serialize_conversation(conversation, include_messages=True)


@router.post("/messages", status_code=201)
def send_message(
    request: SendMessageRequest,
    user: User = Depends(get_current_user),
    chat: ChatService = Depends(get_chat_service),
):
    try:
        exchange = chat.send(user.id, request.conversation_id, request.content)
    except ValidationFailed as e:
        return JSONResponse(
            status_code=400,
            content={"message": "Invalid input", "errors": [err.to_dict() for err in e.errors]},
        )
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Conversation not found")
    except RuntimeUnavailable as e:
        raise HTTPException(status_code=502, detail=str(e))

    return {
        "message": serialize(exchange.user_message),
        "reply": serialize(exchange.reply),
    }


@router.get("/health/ollama")
def ollama_health(client: OllamaClient = Depends(get_ollama_client)):
    return {"ollama_up": client.is_up()}
