from abc import ABC, abstractmethod
from aisamples.core.providers.agents import AgentsProvider
from aisamples.core.providers.chat import ChatClient
from aisamples.core.providers.connections import ChatEndpoint, ConnectionsProvider
import logging
LOGGER = logging.getLogger(__name__)


class Provider(ABC):

    agents: AgentsProvider = None
    connections: ConnectionsProvider = None

    @classmethod
    @abstractmethod
    def provider(cls, config) -> "Provider":
        """
        Builds the provider from the given Config. Called once by Config.get_provider().
        """
        pass

    @abstractmethod
    def create_chat_client(self, endpoint: ChatEndpoint) -> ChatClient:
        pass

    async def close(self) -> None:
        LOGGER.info("Closing provider clients")
        if self.agents is not None:
            await self.agents.close()
        if self.connections is not None:
            await self.connections.close()
