"""
Subset of the Telegram Bot API Update object that the webhook consumes.
"""
from pydantic import BaseModel, ConfigDict, Field


class TelegramUser(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int
    first_name: str | None = None


class Chat(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int


class Message(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    message_id: int
    chat: Chat
    from_user: TelegramUser | None = Field(default=None, alias="from")
    text: str | None = None


class Update(BaseModel):
    model_config = ConfigDict(extra="ignore")

    update_id: int
    message: Message | None = None
