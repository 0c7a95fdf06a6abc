import logging
LOGGER = logging.getLogger(__name__)

from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional
from aisamples.core.models import (
    Agent,
    AuthenticationType,
    Connection,
    ConnectionType,
    Message,
    MessageContentUpdate,
    MessageRole,
    Run,
    RunStatus,
    RunUpdate,
    StreamingUpdate,
    TextContent,
    Thread,
    UpdateKind,
)
from aisamples.core.providers.agents import AgentsProvider
from aisamples.core.providers.chat import ChatClient
from aisamples.core.providers.connections import ChatEndpoint, ConnectionsProvider
from aisamples.core.providers.provider import Provider

EPOCH = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


class MyAgentsProvider(AgentsProvider):
    """
    In-memory agent service. Runs walk through run_statuses, one per get_run,
    and add the answer as an assistant message once completed.
    """

    def __init__(self, answer="4", run_statuses=None, stream_updates=None):
        self.answer = answer
        self.run_statuses = list(run_statuses or [RunStatus.QUEUED, RunStatus.IN_PROGRESS, RunStatus.COMPLETED])
        self.stream_updates = stream_updates
        self.agents: Dict[str, Agent] = {}
        self.threads: Dict[str, List[Message]] = {}
        self.runs: Dict[str, Run] = {}
        self.get_run_calls = 0
        self.deleted = []

    def _now(self, thread_id):
        return EPOCH + timedelta(seconds=len(self.threads[thread_id]))

    async def create_agent(self, model, name, instructions, tools=None):
        agent = Agent(id=f"agent_{len(self.agents) + 1}", name=name, model=model,
                      instructions=instructions, tools=tools or [])
        self.agents[agent.id] = agent
        return agent

    async def list_agents(self):
        return list(self.agents.values())

    async def delete_agent(self, agent_id):
        self.deleted.append(agent_id)
        return self.agents.pop(agent_id, None) is not None

    async def create_thread(self):
        thread = Thread(id=f"thread_{len(self.threads) + 1}", created_at=EPOCH)
        self.threads[thread.id] = []
        return thread

    async def delete_thread(self, thread_id):
        self.deleted.append(thread_id)
        return self.threads.pop(thread_id, None) is not None

    def _add_message(self, thread_id, role, text):
        message = Message(id=f"msg_{len(self.threads[thread_id]) + 1}", thread_id=thread_id, role=role,
                          content=[TextContent(text=text)], created_at=self._now(thread_id))
        self.threads[thread_id].append(message)
        return message

    async def create_message(self, thread_id, role, content):
        return self._add_message(thread_id, role, content)

    async def list_messages(self, thread_id):
        return list(reversed(self.threads[thread_id]))

    async def create_run(self, thread_id, agent_id, additional_instructions=None):
        run = Run(id=f"run_{len(self.runs) + 1}", thread_id=thread_id, agent_id=agent_id,
                  status=RunStatus.QUEUED, additional_instructions=additional_instructions)
        self.runs[run.id] = run
        return run

    async def get_run(self, thread_id, run_id):
        self.get_run_calls += 1
        status = self.run_statuses.pop(0) if self.run_statuses else RunStatus.COMPLETED
        run = self.runs[run_id].model_copy(update={"status": status})
        self.runs[run_id] = run
        if status == RunStatus.COMPLETED:
            self._add_message(thread_id, MessageRole.ASSISTANT, self.answer)
        return run

    async def create_run_streaming(self, thread_id, agent_id, additional_instructions=None):
        run = await self.create_run(thread_id, agent_id, additional_instructions)
        updates = self.stream_updates
        if updates is None:
            updates = [RunUpdate(kind=UpdateKind.RUN_CREATED.value, run=run)]
            updates += [MessageContentUpdate(message_id="msg_2", text=part) for part in ["The ", "line ", "is y=4x+9."]]
            updates.append(StreamingUpdate(kind=UpdateKind.DONE.value))
        for update in updates:
            yield update


class MyChatClient(ChatClient):

    def __init__(self, endpoint: ChatEndpoint, reply="There are 5280 feet in a mile."):
        self.endpoint = endpoint
        self.reply = reply
        self.requests = []
        self.closed = False

    async def complete(self, messages, model):
        self.requests.append({"messages": messages, "model": model})
        return self.reply

    async def close(self):
        self.closed = True


class MyConnectionsProvider(ConnectionsProvider):

    def __init__(self, connection: Optional[Connection] = None):
        self.connection = connection or api_key_connection()
        self.requests = []

    async def get_default_connection(self, connection_type, include_credentials=False):
        self.requests.append((connection_type, include_credentials))
        return self.connection


class MyProvider(Provider):

    def __init__(self, agents=None, connections=None):
        self.agents = agents or MyAgentsProvider()
        self.connections = connections or MyConnectionsProvider()
        self.chat_clients = []
        self.closed = False

    @classmethod
    def provider(cls, config):
        return MyProvider()

    def create_chat_client(self, endpoint):
        chat = MyChatClient(endpoint)
        self.chat_clients.append(chat)
        return chat

    async def close(self):
        self.closed = True
        await super().close()


def api_key_connection(target="https://my-model.eastus2.models.ai.azure.com", key="secret-key",
                       auth_type=AuthenticationType.API_KEY) -> Connection:
    return Connection(id="conn_1", name="serverless-default", connection_type=ConnectionType.SERVERLESS,
                      auth_type=auth_type, target=target, key=key)
