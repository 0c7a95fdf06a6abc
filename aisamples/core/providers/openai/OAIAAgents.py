from aisamples.core.models import Agent, Message, MessageRole, Run, StreamingUpdate, Thread
from aisamples.core.providers.mapping import to_agent, to_message, to_run, to_timestamp, to_updates
from aisamples.core.providers.agents import AgentsProvider
from typing_extensions import override
from typing import AsyncIterator, List, Optional
from openai import AsyncOpenAI, NotFoundError
import logging


LOGGER = logging.getLogger(__name__)


class OAIAAgentsProvider(AgentsProvider):

    def __init__(self, openai_client: AsyncOpenAI):
        self.openai_client = openai_client

    @override
    async def create_agent(self, model: str, name: str, instructions: str, tools: Optional[List[str]] = None) -> Agent:
        assistant = await self.openai_client.beta.assistants.create(
            model=model,
            name=name,
            instructions=instructions,
            tools=[{"type": tool} for tool in (tools or [])],
        )
        LOGGER.info(f"Successfully created agent '{name}' with ID '{assistant.id}'.")
        return to_agent(assistant)

    @override
    async def list_agents(self) -> List[Agent]:
        page = await self.openai_client.beta.assistants.list()
        return [to_agent(assistant) for assistant in page.data]

    @override
    async def delete_agent(self, agent_id: str) -> bool:
        try:
            await self.openai_client.beta.assistants.delete(agent_id)
            LOGGER.info(f"Successfully deleted agent {agent_id} from provider.")
            return True
        except NotFoundError:
            LOGGER.warning(f"Agent {agent_id} not found on provider. Considered 'deleted'.")
            return False
        except Exception as e:
            LOGGER.error(f"Error deleting agent {agent_id} from provider: {e}", exc_info=True)
            raise e

    @override
    async def create_thread(self) -> Thread:
        try:
            openai_thread = await self.openai_client.beta.threads.create()
            LOGGER.info(f"Successfully created thread {openai_thread.id} from provider")
            return Thread(id=openai_thread.id, created_at=to_timestamp(openai_thread.created_at))
        except Exception as e:
            LOGGER.error(f"Error creating thread from provider: {e}", exc_info=True)
            raise e

    @override
    async def delete_thread(self, thread_id: str) -> bool:
        try:
            await self.openai_client.beta.threads.delete(thread_id)
            LOGGER.info(f"Successfully deleted thread {thread_id} from provider")
            return True
        except NotFoundError:
            LOGGER.warning(f"Thread {thread_id} not found on provider")
            return False
        except Exception as e:
            LOGGER.error(f"Error deleting thread {thread_id} from provider: {e}", exc_info=True)
            raise e

    @override
    async def create_message(self, thread_id: str, role: MessageRole, content: str) -> Message:
        msg = await self.openai_client.beta.threads.messages.create(
            thread_id=thread_id,
            role=MessageRole(role).value,
            content=content,
        )
        LOGGER.debug(f"Created message {msg.id} on thread {thread_id}")
        return to_message(msg)

    @override
    async def list_messages(self, thread_id: str) -> List[Message]:
        page = await self.openai_client.beta.threads.messages.list(thread_id=thread_id, order="desc")
        return [to_message(message) for message in page.data]

    @override
    async def create_run(self, thread_id: str, agent_id: str, additional_instructions: Optional[str] = None) -> Run:
        run = await self.openai_client.beta.threads.runs.create(
            thread_id=thread_id,
            assistant_id=agent_id,
            additional_instructions=additional_instructions,
        )
        LOGGER.info(f"Started run {run.id} of agent {agent_id} on thread {thread_id}")
        return to_run(run, additional_instructions)

    @override
    async def get_run(self, thread_id: str, run_id: str) -> Run:
        run = await self.openai_client.beta.threads.runs.retrieve(run_id=run_id, thread_id=thread_id)
        return to_run(run)

    @override
    async def create_run_streaming(self, thread_id: str, agent_id: str,
                                   additional_instructions: Optional[str] = None) -> AsyncIterator[StreamingUpdate]:
        LOGGER.debug(f"Streaming run of agent {agent_id} on thread {thread_id}")
        stream = await self.openai_client.beta.threads.runs.create(
            thread_id=thread_id,
            assistant_id=agent_id,
            additional_instructions=additional_instructions,
            stream=True,
        )
        try:
            async for event in stream:
                LOGGER.debug(f"Stream event: {event.event}")
                for update in to_updates(event.event, event.data, additional_instructions):
                    yield update
        finally:
            await stream.close()

    @override
    async def close(self) -> None:
        await self.openai_client.close()
