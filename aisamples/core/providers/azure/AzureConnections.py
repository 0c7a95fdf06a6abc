from aisamples.core.errors import UnsupportedAuthTypeError
from aisamples.core.models import AuthenticationType, Connection, ConnectionType
from aisamples.core.providers.connections import ConnectionsProvider
from typing_extensions import override
from azure.ai.projects.aio import AIProjectClient
from azure.ai.projects.models import ConnectionType as ProjectConnectionType
import logging

LOGGER = logging.getLogger(__name__)

# keys are the SDK's authentication type values, lower case without separators
AUTH_TYPES = {
    "apikey": AuthenticationType.API_KEY,
    "aad": AuthenticationType.ENTRA_ID,
    "entraid": AuthenticationType.ENTRA_ID,
    "sas": AuthenticationType.SAS,
    "customkeys": AuthenticationType.CUSTOM,
    "custom": AuthenticationType.CUSTOM,
    "none": AuthenticationType.NONE,
}


def to_auth_type(value) -> AuthenticationType:
    name = str(getattr(value, 'value', value)).replace('_', '').replace('-', '').lower()
    if name not in AUTH_TYPES:
        raise UnsupportedAuthTypeError(str(getattr(value, 'value', value)))
    return AUTH_TYPES[name]


def to_connection(properties, connection_type: ConnectionType) -> Connection:
    return Connection(
        id=properties.id,
        name=getattr(properties, 'name', None),
        connection_type=connection_type,
        auth_type=to_auth_type(properties.authentication_type),
        target=getattr(properties, 'endpoint_url', None),
        key=getattr(properties, 'key', None),
    )


class AzureConnectionsProvider(ConnectionsProvider):

    def __init__(self, project_client: AIProjectClient):
        self.project_client = project_client

    @classmethod
    def from_connection_string(cls, conn_str: str, credential) -> "AzureConnectionsProvider":
        project_client = AIProjectClient.from_connection_string(conn_str=conn_str, credential=credential)
        LOGGER.info("Created AI project client from connection string")
        return cls(project_client)

    @override
    async def get_default_connection(self, connection_type: ConnectionType, include_credentials: bool = False) -> Connection:
        try:
            properties = await self.project_client.connections.get_default(
                connection_type=getattr(ProjectConnectionType, connection_type.name),
                include_credentials=include_credentials,
            )
        except Exception as e:
            LOGGER.error(f"Error getting default {connection_type.value} connection: {e}", exc_info=True)
            raise e
        connection = to_connection(properties, connection_type)
        LOGGER.info(f"Default {connection_type.value} connection is {connection.id} ({connection.auth_type.value})")
        return connection

    @override
    async def close(self) -> None:
        await self.project_client.close()
