"""
Maps agent service SDK objects to the records in aisamples.core.models.

The OpenAI assistants SDK and the Azure AI project agents SDK return objects
of the same shape (id, type tagged content parts, run status), differing in a
few names: assistant_id vs agent_id, unix seconds vs datetime timestamps,
plain strings vs enums. Both backends use these functions.
"""
import logging
LOGGER = logging.getLogger(__name__)

from datetime import datetime, timezone
from typing import List, Optional
from aisamples.core.errors import RemoteServiceError
from aisamples.core.models import (
    Agent,
    ImageFileContent,
    Message,
    MessageContentUpdate,
    Run,
    RunUpdate,
    StreamingUpdate,
    TextContent,
    UpdateKind,
)


def enum_value(value):
    return getattr(value, 'value', value)


def to_timestamp(value) -> Optional[datetime]:
    if value is None or isinstance(value, datetime):
        return value
    return datetime.fromtimestamp(value, tz=timezone.utc)


def to_agent(agent) -> Agent:
    return Agent(
        id=agent.id,
        name=agent.name,
        model=agent.model,
        instructions=agent.instructions,
        tools=[enum_value(tool.type) for tool in (agent.tools or [])],
    )


def to_message(message) -> Message:
    content = []
    for part in message.content:
        part_type = enum_value(part.type)
        if part_type == "text":
            content.append(TextContent(text=part.text.value))
        elif part_type == "image_file":
            content.append(ImageFileContent(file_id=part.image_file.file_id))
        else:
            LOGGER.warning(f"Skipping message {message.id} content of unhandled type: {part_type}")
    return Message(
        id=message.id,
        thread_id=message.thread_id,
        role=enum_value(message.role),
        content=content,
        created_at=to_timestamp(message.created_at),
    )


def _error_message(error) -> Optional[str]:
    if error is None:
        return None
    if isinstance(error, dict):
        return error.get('message')
    return getattr(error, 'message', str(error))


def to_run(run, additional_instructions: Optional[str] = None) -> Run:
    agent_id = getattr(run, 'agent_id', None) or getattr(run, 'assistant_id', None)
    return Run(
        id=run.id,
        thread_id=run.thread_id,
        agent_id=agent_id,
        status=enum_value(run.status),
        additional_instructions=additional_instructions,
        last_error=_error_message(getattr(run, 'last_error', None)),
    )


def to_updates(kind: str, data, additional_instructions: Optional[str] = None) -> List[StreamingUpdate]:
    """
    Maps one stream event to zero or more updates. A message delta holds one
    update per content part, in part order.
    """
    kind = str(enum_value(kind))
    if kind == UpdateKind.ERROR:
        raise RemoteServiceError(f"Run stream reported an error: {_error_message(data)}")
    if kind.startswith("thread.run.") and not kind.startswith("thread.run.step."):
        return [RunUpdate(kind=kind, run=to_run(data, additional_instructions))]
    if kind == UpdateKind.MESSAGE_DELTA:
        updates = []
        for part in data.delta.content or []:
            part_type = enum_value(part.type)
            if part_type == "text":
                text = part.text.value if part.text is not None and part.text.value else ""
                updates.append(MessageContentUpdate(message_id=data.id, text=text))
            elif part_type == "image_file":
                if part.image_file is None or not part.image_file.file_id:
                    LOGGER.debug(f"Image delta without a file id on message {data.id}")
                    continue
                updates.append(MessageContentUpdate(message_id=data.id, image_file_id=part.image_file.file_id))
            else:
                LOGGER.warning(f"Delta message of unhandled type: {part_type}")
        return updates
    return [StreamingUpdate(kind=kind)]
