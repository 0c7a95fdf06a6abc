import logging
from aisamples.core.providers.provider import Provider
from aisamples.core.providers.connections import ChatEndpoint
from aisamples.core.providers.openai.OAIAAgents import OAIAAgentsProvider
from aisamples.core.providers.openai.OAIAChat import OAIAChatClient
from aisamples.core.providers.azure.AzureConnections import AzureConnectionsProvider
from azure.identity.aio import DefaultAzureCredential, get_bearer_token_provider
from openai import AsyncOpenAI, AsyncAzureOpenAI
from typing_extensions import override
import os

LOGGER = logging.getLogger(__name__)

COGNITIVE_SERVICES_SCOPE = "https://cognitiveservices.azure.com/.default"


class OAIAProvider(Provider):
    """
    Agents run on the OpenAI assistants API (Azure OpenAI when configured),
    connections come from the Azure AI project named by PROJECT_CONNECTION_STRING.
    Select it with SAMPLES_PROVIDER_CLASS=aisamples.core.providers.openai.OAIAProvider.OAIAProvider.
    """

    def __init__(self, config):
        super().__init__()
        self.config = config
        self.credential = None
        self._agents = None
        self._connections = None

    @classmethod
    @override
    def provider(cls, config) -> Provider:
        return OAIAProvider(config)

    def get_credential(self) -> DefaultAzureCredential:
        if self.credential is None:
            self.credential = DefaultAzureCredential()
        return self.credential

    def create_openai_client(self) -> AsyncOpenAI:
        if os.getenv('AZURE_OPENAI_API_KEY'):
            LOGGER.info("Using Azure OpenAI API with key authentication")
            return AsyncAzureOpenAI(
                api_key=os.getenv("AZURE_OPENAI_API_KEY"),
                azure_endpoint=os.getenv("AZURE_OPENAI_ENDPOINT"),
                api_version=os.getenv('AZURE_OPENAI_API_VERSION', "2025-04-01-preview"),
            )
        elif os.getenv('AZURE_OPENAI_ENDPOINT'):
            LOGGER.info("Using Azure OpenAI API with Entra ID authentication")
            return AsyncAzureOpenAI(
                azure_ad_token_provider=get_bearer_token_provider(self.get_credential(), COGNITIVE_SERVICES_SCOPE),
                azure_endpoint=os.getenv("AZURE_OPENAI_ENDPOINT"),
                api_version=os.getenv('AZURE_OPENAI_API_VERSION', "2025-04-01-preview"),
            )
        else:
            LOGGER.info("Using OpenAI API")
            return AsyncOpenAI(api_key=os.getenv('OPENAI_KEY'), project=os.getenv('OPENAI_PROJECT'))

    @property
    def agents(self) -> OAIAAgentsProvider:
        if self._agents is None:
            self._agents = OAIAAgentsProvider(self.create_openai_client())
        return self._agents

    @property
    def connections(self) -> AzureConnectionsProvider:
        if self._connections is None:
            conn_str = self.config.get_project_connection_string()
            self._connections = AzureConnectionsProvider.from_connection_string(conn_str.raw, self.get_credential())
        return self._connections

    @override
    def create_chat_client(self, endpoint: ChatEndpoint) -> OAIAChatClient:
        return OAIAChatClient.from_endpoint(endpoint.endpoint, endpoint.api_key)

    @override
    async def close(self) -> None:
        if self._agents is not None:
            await self._agents.close()
            self._agents = None
        if self._connections is not None:
            await self._connections.close()
            self._connections = None
        if self.credential is not None:
            await self.credential.close()
            self.credential = None
        LOGGER.info("Closed provider clients")
