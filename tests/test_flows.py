import io
import pytest
from unittest.mock import patch
from aisamples.core.config import Config
from aisamples.core.errors import ConfigurationError, ContractViolationError, UriFormatError
from aisamples.core.models import ConnectionType, MessageContentUpdate, RunStatus
from aisamples.core.render import RUN_STARTED_BANNER
from aisamples.flows import run_basic_sample, run_connection_sample, run_streaming_sample
from aisamples.flows.basic import ADDITIONAL_INSTRUCTIONS
from tests.common import MyAgentsProvider, MyConnectionsProvider, MyProvider, api_key_connection
import os


@pytest.fixture
def config():
    env = {'SAMPLES_POLL_INTERVAL': '0', 'MODEL_DEPLOYMENT_NAME': 'Phi-4', 'AGENT_MODEL': 'gpt-4o'}
    with patch.dict(os.environ, env):
        yield Config()


class TestBasicSample:

    @pytest.mark.asyncio
    async def test_end_to_end(self, config):
        agents = MyAgentsProvider(answer="2+2 equals 4.",
                                  run_statuses=[RunStatus.QUEUED, RunStatus.IN_PROGRESS, RunStatus.COMPLETED])
        out = io.StringIO()
        messages = await run_basic_sample(MyProvider(agents=agents), config, out=out, prompt="2+2=?")

        assert list(agents.agents) == ["agent_1"]
        assert list(agents.threads) == ["thread_1"]
        assert agents.get_run_calls == 3
        assert agents.runs["run_1"].additional_instructions == ADDITIONAL_INSTRUCTIONS
        assert [m.role.value for m in messages] == ["assistant", "user"]

        output = out.getvalue()
        assert output.startswith("-------- Azure AI Basic Sample --------\n")
        assert output.count("assistant: ") == 1
        assert "assistant: 2+2 equals 4.\n" in output
        assert "user: 2+2=?\n" in output

    @pytest.mark.asyncio
    async def test_newest_message_must_be_the_one_posted(self, config):

        class StaleAgents(MyAgentsProvider):
            async def list_messages(self, thread_id):
                return list(self.threads[thread_id])[:-1]

        with pytest.raises(ContractViolationError):
            await run_basic_sample(MyProvider(agents=StaleAgents()), config, out=io.StringIO())

    @pytest.mark.asyncio
    async def test_cleanup(self, config):
        agents = MyAgentsProvider()
        await run_basic_sample(MyProvider(agents=agents), config, out=io.StringIO(), cleanup=True)
        assert agents.deleted == ["thread_1", "agent_1"]
        assert not agents.threads and not agents.agents

    @pytest.mark.asyncio
    async def test_cleanup_after_failure(self, config):
        agents = MyAgentsProvider(run_statuses=[RunStatus.IN_PROGRESS] * 5)
        with patch.dict(os.environ, {'SAMPLES_POLL_MAX_ATTEMPTS': '2'}):
            with pytest.raises(TimeoutError):
                await run_basic_sample(MyProvider(agents=agents), config, out=io.StringIO(), cleanup=True)
        assert agents.deleted == ["thread_1", "agent_1"]


class TestStreamingSample:

    @pytest.mark.asyncio
    async def test_streams_content(self, config):
        agents = MyAgentsProvider()
        out = io.StringIO()
        received = await run_streaming_sample(MyProvider(agents=agents), config, out=out)

        assert all(isinstance(u, MessageContentUpdate) for u in received)
        output = out.getvalue()
        assert output.startswith("-------- Azure AI Streaming Sample --------\n")
        assert output.count(RUN_STARTED_BANNER) == 1
        assert f"{RUN_STARTED_BANNER}\nThe line is y=4x+9.\n" in output
        assert agents.agents["agent_1"].name == "My Friendly Test Assistant"
        assert agents.agents["agent_1"].tools == ["code_interpreter"]


class TestConnectionSample:

    @pytest.mark.asyncio
    async def test_prints_reply(self, config):
        provider = MyProvider()
        out = io.StringIO()
        reply = await run_connection_sample(provider, config, out=out)

        assert reply == "There are 5280 feet in a mile."
        assert out.getvalue() == "There are 5280 feet in a mile.\n"
        assert provider.connections.requests == [(ConnectionType.SERVERLESS, True)]
        chat = provider.chat_clients[0]
        assert chat.endpoint.endpoint == "https://my-model.eastus2.models.ai.azure.com"
        assert chat.requests[0]["model"] == "Phi-4"
        assert [m["role"] for m in chat.requests[0]["messages"]] == ["system", "user"]
        assert chat.closed

    @pytest.mark.asyncio
    async def test_missing_target_builds_no_client(self, config):
        provider = MyProvider(connections=MyConnectionsProvider(api_key_connection(target=None)))
        with pytest.raises(ConfigurationError):
            await run_connection_sample(provider, config, out=io.StringIO())
        assert provider.chat_clients == []

    @pytest.mark.asyncio
    async def test_malformed_target_builds_no_client(self, config):
        provider = MyProvider(connections=MyConnectionsProvider(api_key_connection(target="not a uri")))
        with pytest.raises(UriFormatError):
            await run_connection_sample(provider, config, out=io.StringIO())
        assert provider.chat_clients == []

    @pytest.mark.asyncio
    async def test_model_deployment_required(self):
        provider = MyProvider()
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(ConfigurationError):
                await run_connection_sample(provider, Config(), out=io.StringIO())
        assert provider.connections.requests == []
