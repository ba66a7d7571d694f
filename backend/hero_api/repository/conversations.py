from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from hero_api.db import models
from hero_api.db.models import advance, utcnow
from hero_api.domain import ChatMessage, Conversation
from hero_api.errors import NotFoundError, StorageError
from hero_api.repository.heroes import to_domain as hero_to_domain


def message_to_domain(row: models.Message) -> ChatMessage:
    return ChatMessage(
        id=row.id,
        conversation_id=row.conversation_id,
        role=row.role,
        content=row.content,
        created_at=row.created_at,
    )


def to_domain(row: models.Conversation, with_messages: bool = False) -> Conversation:
    conversation = Conversation(
        id=row.id,
        user_id=row.user_id,
        hero=hero_to_domain(row.hero),
        title=row.title,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )
    if with_messages:
        conversation.messages = [message_to_domain(m) for m in row.messages]
    return conversation


class ConversationRepository:
    def __init__(self, db: Session):
        self.db = db

    def create(self, user_id: str, hero_id: str) -> Conversation:
        try:
            hero = self.db.get(models.Hero, hero_id)
            if hero is None:
                raise NotFoundError("hero", hero_id)

            now = utcnow()
            row = models.Conversation(
                user_id=user_id,
                hero_id=hero.id,
                title=f"Conversation with {hero.name}",
                created_at=now,
                updated_at=now,
            )
            self.db.add(row)
            self.db.commit()
            self.db.refresh(row)
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StorageError(f"could not create conversation: {e}") from e

        return to_domain(row)

    def list_for_user(self, user_id: str) -> List[Conversation]:
        try:
            rows = (
                self.db.query(models.Conversation)
                .options(
                    selectinload(models.Conversation.hero),
                    selectinload(models.Conversation.messages),
                )
                .filter(models.Conversation.user_id == user_id)
                .order_by(models.Conversation.updated_at.desc())
                .all()
            )
        except SQLAlchemyError as e:
            raise StorageError(f"could not list conversations: {e}") from e

        conversations = []
        for row in rows:
            conversation = to_domain(row)
            if row.messages:
                conversation.last_message = message_to_domain(row.messages[-1])
            conversations.append(conversation)
        return conversations

    def get_for_user(self, conversation_id: str, user_id: str) -> Optional[Conversation]:
        try:
            row = (
                self.db.query(models.Conversation)
                .filter(
                    models.Conversation.id == conversation_id,
                    models.Conversation.user_id == user_id,
                )
                .one_or_none()
            )
        except SQLAlchemyError as e:
            raise StorageError(f"could not read conversation {conversation_id}: {e}") from e

        return to_domain(row, with_messages=True) if row else None

    def add_message(self, conversation_id: str, role: str, content: str) -> ChatMessage:
        try:
            conversation = self.db.get(models.Conversation, conversation_id)
            if conversation is None:
                raise NotFoundError("conversation", conversation_id)

            # messages sort by created_at; keep it strictly increasing per conversation
            now = advance(conversation.updated_at)
            row = models.Message(role=role, content=content, created_at=now)
            conversation.messages.append(row)
            conversation.updated_at = now
            self.db.commit()
            self.db.refresh(row)
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StorageError(f"could not store message: {e}") from e

        return message_to_domain(row)
