import logging
from aisamples.core.providers.provider import Provider
from aisamples.core.providers.connections import ChatEndpoint
from aisamples.core.providers.azure.AzureAgents import AzureAgentsProvider
from aisamples.core.providers.azure.AzureConnections import AzureConnectionsProvider
from aisamples.core.providers.openai.OAIAChat import OAIAChatClient
from azure.ai.projects.aio import AIProjectClient
from azure.identity.aio import DefaultAzureCredential
from typing_extensions import override

LOGGER = logging.getLogger(__name__)


class AzureProvider(Provider):
    """
    Agents and connections both come from the Azure AI project named by
    PROJECT_CONNECTION_STRING. The project client and credential are created on
    first use and shared by the agents and connections providers.
    """

    def __init__(self, config):
        super().__init__()
        self.config = config
        self.credential = None
        self._project_client = None
        self._agents = None
        self._connections = None

    @classmethod
    @override
    def provider(cls, config) -> Provider:
        return AzureProvider(config)

    def get_credential(self) -> DefaultAzureCredential:
        if self.credential is None:
            self.credential = DefaultAzureCredential()
        return self.credential

    @property
    def project_client(self) -> AIProjectClient:
        if self._project_client is None:
            conn_str = self.config.get_project_connection_string()
            self._project_client = AIProjectClient.from_connection_string(
                conn_str=conn_str.raw,
                credential=self.get_credential(),
            )
            LOGGER.info(f"Created AI project client for project {conn_str.project_name}")
        return self._project_client

    @property
    def agents(self) -> AzureAgentsProvider:
        if self._agents is None:
            self._agents = AzureAgentsProvider(self.project_client.agents)
        return self._agents

    @property
    def connections(self) -> AzureConnectionsProvider:
        if self._connections is None:
            self._connections = AzureConnectionsProvider(self.project_client)
        return self._connections

    @override
    def create_chat_client(self, endpoint: ChatEndpoint) -> OAIAChatClient:
        return OAIAChatClient.from_endpoint(endpoint.endpoint, endpoint.api_key)

    @override
    async def close(self) -> None:
        # agents and connections share the project client, close it once
        if self._project_client is not None:
            await self._project_client.close()
            self._project_client = None
        if self.credential is not None:
            await self.credential.close()
            self.credential = None
        self._agents = None
        self._connections = None
        LOGGER.info("Closed provider clients")
