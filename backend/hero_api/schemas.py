from pydantic import BaseModel, ConfigDict, Field


class StartConversationRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    hero_id: str = Field(alias="heroId", min_length=1)


class SendMessageRequest(BaseModel):
    """Content emptiness is checked by ChatService, not here."""
    model_config = ConfigDict(populate_by_name=True)

    conversation_id: str = Field(alias="conversationId", min_length=1)
    content: str
