import logging
from dataclasses import dataclass
from typing import Dict, List

from hero_api.domain import ChatMessage, Conversation
from hero_api.errors import NotFoundError, RuntimeUnavailable, ValidationError, ValidationFailed
from hero_api.llm.client import OllamaClient, OllamaError
from hero_api.repository.conversations import ConversationRepository

logger = logging.getLogger(__name__)

USER = "USER"
ASSISTANT = "ASSISTANT"

_OLLAMA_ROLES = {USER: "user", ASSISTANT: "assistant"}


@dataclass
class ChatExchange:
    user_message: ChatMessage
    reply: ChatMessage


def build_chat_messages(conversation: Conversation) -> List[Dict[str, str]]:
    messages = []
    if conversation.hero.system_prompt:
        messages.append({"role": "system", "content": conversation.hero.system_prompt})

    for m in conversation.messages:
        messages.append({"role": _OLLAMA_ROLES.get(m.role, "user"), "content": m.content})
    return messages


class ChatService:
    def __init__(self, conversations: ConversationRepository, client: OllamaClient):
        self.conversations = conversations
        self.client = client

    def send(self, user_id: str, conversation_id: str, content: str) -> ChatExchange:
        if not isinstance(content, str) or not content.strip():
            raise ValidationFailed([ValidationError(field="content", reason="Message is required")])

        conversation = self.conversations.get_for_user(conversation_id, user_id)
        if conversation is None:
            raise NotFoundError("conversation", conversation_id)

        user_message = self.conversations.add_message(conversation.id, USER, content)
        conversation.messages.append(user_message)

        # the user message stays stored even if the hero cannot answer
        try:
            answer = self.client.chat(conversation.hero.model_name, build_chat_messages(conversation))
        except OllamaError as e:
            logger.warning("Chat reply failed for conversation %s: %s", conversation.id, e)
            raise RuntimeUnavailable(str(e)) from e

        reply = self.conversations.add_message(conversation.id, ASSISTANT, answer)
        return ChatExchange(user_message=user_message, reply=reply)
