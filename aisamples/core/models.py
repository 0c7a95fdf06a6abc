import logging
LOGGER = logging.getLogger(__name__)

from datetime import datetime
from enum import Enum
from typing import List, Literal, Optional, Union
from typing_extensions import Annotated
from pydantic import BaseModel, ConfigDict, Field, SecretStr


class RunStatus(str, Enum):
    QUEUED = "queued"
    IN_PROGRESS = "in_progress"
    REQUIRES_ACTION = "requires_action"
    CANCELLING = "cancelling"
    CANCELLED = "cancelled"
    FAILED = "failed"
    COMPLETED = "completed"
    INCOMPLETE = "incomplete"
    EXPIRED = "expired"

    @property
    def is_pending(self) -> bool:
        return self in (RunStatus.QUEUED, RunStatus.IN_PROGRESS)


class MessageRole(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"


class AuthenticationType(str, Enum):
    API_KEY = "api_key"
    ENTRA_ID = "entra_id"
    SAS = "sas"
    CUSTOM = "custom"
    NONE = "none"


class ConnectionType(str, Enum):
    AZURE_OPEN_AI = "azure_open_ai"
    SERVERLESS = "serverless"
    AZURE_AI_SERVICES = "azure_ai_services"
    AZURE_AI_SEARCH = "azure_ai_search"
    AZURE_BLOB_STORAGE = "azure_blob_storage"


class UpdateKind(str, Enum):
    RUN_CREATED = "thread.run.created"
    RUN_QUEUED = "thread.run.queued"
    RUN_IN_PROGRESS = "thread.run.in_progress"
    RUN_COMPLETED = "thread.run.completed"
    RUN_FAILED = "thread.run.failed"
    MESSAGE_CREATED = "thread.message.created"
    MESSAGE_DELTA = "thread.message.delta"
    MESSAGE_COMPLETED = "thread.message.completed"
    ERROR = "error"
    DONE = "done"


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True)


class Agent(_Record):
    id: str
    name: Optional[str] = None
    model: str
    instructions: Optional[str] = None
    tools: List[str] = []


class Thread(_Record):
    id: str
    created_at: Optional[datetime] = None


class TextContent(_Record):
    type: Literal["text"] = "text"
    text: str


class ImageFileContent(_Record):
    type: Literal["image_file"] = "image_file"
    file_id: str


MessageContent = Annotated[Union[TextContent, ImageFileContent], Field(discriminator="type")]


class Message(_Record):
    id: str
    thread_id: str
    role: MessageRole
    content: List[MessageContent] = []
    created_at: datetime


class Run(_Record):
    id: str
    thread_id: str
    agent_id: str
    status: RunStatus
    additional_instructions: Optional[str] = None
    last_error: Optional[str] = None


class Connection(_Record):
    """
    A project connection. For API key auth the target is the endpoint URI and
    key carries the secret; neither is validated here, see ConnectionsProvider.
    """
    id: str
    name: Optional[str] = None
    connection_type: ConnectionType
    auth_type: AuthenticationType
    target: Optional[str] = None
    key: Optional[SecretStr] = None


class StreamingUpdate(_Record):
    kind: str


class RunUpdate(StreamingUpdate):
    run: Run


class MessageContentUpdate(StreamingUpdate):
    kind: str = UpdateKind.MESSAGE_DELTA.value
    message_id: str
    text: str = ""
    image_file_id: Optional[str] = None
