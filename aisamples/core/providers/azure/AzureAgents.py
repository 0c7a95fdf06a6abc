from aisamples.core.errors import ConfigurationError
from aisamples.core.models import Agent, Message, MessageRole, Run, StreamingUpdate, Thread
from aisamples.core.providers.agents import AgentsProvider
from aisamples.core.providers.mapping import enum_value, to_agent, to_message, to_run, to_timestamp, to_updates
from typing_extensions import override
from typing import AsyncIterator, List, Optional
from azure.ai.projects.models import CodeInterpreterToolDefinition
from azure.core.exceptions import ResourceNotFoundError
import logging

LOGGER = logging.getLogger(__name__)

TOOL_DEFINITIONS = {
    "code_interpreter": CodeInterpreterToolDefinition,
}


def to_tool_definitions(tools: Optional[List[str]]):
    definitions = []
    for tool in tools or []:
        if tool not in TOOL_DEFINITIONS:
            raise ConfigurationError(f"Unsupported agent tool: {tool}")
        definitions.append(TOOL_DEFINITIONS[tool]())
    return definitions


class AzureAgentsProvider(AgentsProvider):
    """
    Agents on the Azure AI project agent service, through project_client.agents.
    The project client is owned by AzureProvider, so close() leaves it open.
    """

    def __init__(self, agents_client):
        self.agents_client = agents_client

    @override
    async def create_agent(self, model: str, name: str, instructions: str, tools: Optional[List[str]] = None) -> Agent:
        agent = await self.agents_client.create_agent(
            model=model,
            name=name,
            instructions=instructions,
            tools=to_tool_definitions(tools),
        )
        LOGGER.info(f"Successfully created agent '{name}' with ID '{agent.id}'.")
        return to_agent(agent)

    @override
    async def list_agents(self) -> List[Agent]:
        agents = await self.agents_client.list_agents()
        return [to_agent(agent) for agent in agents.data]

    @override
    async def delete_agent(self, agent_id: str) -> bool:
        try:
            await self.agents_client.delete_agent(agent_id)
            LOGGER.info(f"Successfully deleted agent {agent_id} from project.")
            return True
        except ResourceNotFoundError:
            LOGGER.warning(f"Agent {agent_id} not found in project. Considered 'deleted'.")
            return False
        except Exception as e:
            LOGGER.error(f"Error deleting agent {agent_id} from project: {e}", exc_info=True)
            raise e

    @override
    async def create_thread(self) -> Thread:
        try:
            thread = await self.agents_client.create_thread()
            LOGGER.info(f"Successfully created thread {thread.id} in project")
            return Thread(id=thread.id, created_at=to_timestamp(thread.created_at))
        except Exception as e:
            LOGGER.error(f"Error creating thread in project: {e}", exc_info=True)
            raise e

    @override
    async def delete_thread(self, thread_id: str) -> bool:
        try:
            await self.agents_client.delete_thread(thread_id)
            LOGGER.info(f"Successfully deleted thread {thread_id} from project")
            return True
        except ResourceNotFoundError:
            LOGGER.warning(f"Thread {thread_id} not found in project")
            return False
        except Exception as e:
            LOGGER.error(f"Error deleting thread {thread_id} from project: {e}", exc_info=True)
            raise e

    @override
    async def create_message(self, thread_id: str, role: MessageRole, content: str) -> Message:
        msg = await self.agents_client.create_message(thread_id=thread_id, role=MessageRole(role).value, content=content)
        LOGGER.debug(f"Created message {msg.id} on thread {thread_id}")
        return to_message(msg)

    @override
    async def list_messages(self, thread_id: str) -> List[Message]:
        messages = await self.agents_client.list_messages(thread_id=thread_id, order="desc")
        return [to_message(message) for message in messages.data]

    @override
    async def create_run(self, thread_id: str, agent_id: str, additional_instructions: Optional[str] = None) -> Run:
        run = await self.agents_client.create_run(
            thread_id=thread_id,
            agent_id=agent_id,
            additional_instructions=additional_instructions,
        )
        LOGGER.info(f"Started run {run.id} of agent {agent_id} on thread {thread_id}")
        return to_run(run, additional_instructions)

    @override
    async def get_run(self, thread_id: str, run_id: str) -> Run:
        run = await self.agents_client.get_run(thread_id=thread_id, run_id=run_id)
        return to_run(run)

    @override
    async def create_run_streaming(self, thread_id: str, agent_id: str,
                                   additional_instructions: Optional[str] = None) -> AsyncIterator[StreamingUpdate]:
        LOGGER.debug(f"Streaming run of agent {agent_id} on thread {thread_id}")
        stream = await self.agents_client.create_stream(
            thread_id=thread_id,
            agent_id=agent_id,
            additional_instructions=additional_instructions,
        )
        async with stream:
            async for event_type, event_data, _ in stream:
                LOGGER.debug(f"Stream event: {enum_value(event_type)}")
                for update in to_updates(event_type, event_data, additional_instructions):
                    yield update
