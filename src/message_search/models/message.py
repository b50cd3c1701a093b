"""Message data model with ingestion-time validation."""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union
from dataclasses import dataclass, field
from pydantic import BaseModel, Field, ValidationError as PydanticValidationError, field_validator

from ..core.exceptions import MalformedTimestampError, ValidationError


class MessageType(str, Enum):
    """Kinds of chat messages."""
    TEXT = "text"
    IMAGE = "image"
    FILE = "file"
    VOICE = "voice"
    VIDEO = "video"
    SYSTEM = "system"


def normalize_timestamp(value: Any, message_id: Optional[str] = None) -> datetime:
    """
    Return a timezone-aware timestamp suitable for ordering.

    Naive datetimes are taken to be UTC.

    Raises:
        MalformedTimestampError: If value is not a datetime
    """
    if not isinstance(value, datetime):
        raise MalformedTimestampError(message_id, value)
    if value.tzinfo is None or value.tzinfo.utcoffset(value) is None:
        return value.replace(tzinfo=timezone.utc)
    return value


@dataclass(frozen=True)
class User:
    """
    Message sender as supplied by the message store.

    Attributes:
        id: Unique user identifier
        name: Display name
        avatar: Optional avatar reference
    """
    id: str
    name: str
    avatar: Optional[str] = None


@dataclass(frozen=True)
class Attachment:
    """File attached to a message."""
    id: str
    name: str
    type: str
    url: str


@dataclass(frozen=True)
class Message:
    """
    Chat message as read by the search engine.

    Attributes:
        id: Unique message identifier
        content: Text content (None for non-text messages)
        type: Kind of message
        sender: User who sent the message
        timestamp: Send time, normalized to UTC when naive
        chat_id: Identifier of the owning chat
        chat_name: Display name of the owning chat
        attachments: Attached files, in display order
    """
    id: str
    content: Optional[str]
    type: MessageType
    sender: User
    timestamp: datetime
    chat_id: str
    chat_name: str = ""
    attachments: Tuple[Attachment, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        """Validate message after initialization."""
        if not self.id or not self.id.strip():
            raise ValueError("Message ID cannot be empty")
        if not isinstance(self.type, MessageType):
            raise ValueError(f"Invalid message type: {self.type}")
        if not isinstance(self.sender, User):
            raise ValueError("Message sender must be a User")
        object.__setattr__(self, "timestamp", normalize_timestamp(self.timestamp, self.id))
        object.__setattr__(self, "attachments", tuple(self.attachments))

    @property
    def has_attachments(self) -> bool:
        return len(self.attachments) > 0


class UserModel(BaseModel):
    """Pydantic model for sender records."""

    id: str = Field(..., min_length=1, description="User identifier")
    name: str = Field(..., description="Display name")
    avatar: Optional[str] = Field(None, description="Avatar reference")


class AttachmentModel(BaseModel):
    """Pydantic model for attachment records."""

    id: str = Field(..., min_length=1)
    name: str
    type: str
    url: str


class MessageModel(BaseModel):
    """Pydantic model for validating raw message records at ingestion."""

    id: str = Field(..., min_length=1, description="Unique message identifier")
    content: Optional[str] = Field(None, description="Message text content")
    type: MessageType = Field(MessageType.TEXT, description="Message type")
    sender: UserModel = Field(..., description="Message sender")
    timestamp: datetime = Field(..., description="Send time")
    chat_id: str = Field(..., min_length=1, description="Chat identifier")
    chat_name: str = Field("", description="Chat display name")
    attachments: List[AttachmentModel] = Field(default_factory=list, description="Attachments")

    @field_validator('id', 'chat_id')
    @classmethod
    def validate_identifier(cls, v: str) -> str:
        """Ensure identifiers are not just whitespace."""
        if not v.strip():
            raise ValueError('Identifier cannot be empty or whitespace only')
        return v.strip()

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> 'MessageModel':
        """
        Validate a raw record, separating timestamp failures from other errors.

        Raises:
            MalformedTimestampError: If the timestamp cannot be parsed
            ValidationError: If any other field is invalid
        """
        try:
            return cls.model_validate(record)
        except PydanticValidationError as e:
            for error in e.errors():
                if error["loc"] and error["loc"][0] == "timestamp":
                    message_id = record.get("id") if isinstance(record, dict) else None
                    raw = record.get("timestamp") if isinstance(record, dict) else None
                    raise MalformedTimestampError(message_id, raw) from e
            raise ValidationError(f"Invalid message record: {e}") from e

    def to_message(self) -> Message:
        """Convert to Message dataclass."""
        return Message(
            id=self.id,
            content=self.content,
            type=self.type,
            sender=User(id=self.sender.id, name=self.sender.name, avatar=self.sender.avatar),
            timestamp=self.timestamp,
            chat_id=self.chat_id,
            chat_name=self.chat_name,
            attachments=tuple(
                Attachment(id=a.id, name=a.name, type=a.type, url=a.url)
                for a in self.attachments
            ),
        )


def message_from_record(record: Union[Dict[str, Any], Message]) -> Message:
    """Build a Message from a raw record, passing Message instances through."""
    if isinstance(record, Message):
        return record
    return MessageModel.from_record(record).to_message()
