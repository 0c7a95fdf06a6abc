from abc import ABC, abstractmethod
from dataclasses import dataclass
from urllib.parse import urlparse
from typing_extensions import assert_never
from aisamples.core.errors import ConfigurationError, UnsupportedAuthTypeError, UriFormatError
from aisamples.core.models import AuthenticationType, Connection, ConnectionType
import logging
LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChatEndpoint:
    endpoint: str
    api_key: str

    def __repr__(self):
        return f"ChatEndpoint(endpoint={self.endpoint!r}, api_key='**********')"


def parse_absolute_uri(target: str) -> str:
    """
    Returns the target as an absolute http(s) URL. The chat client posts to
    this URL, so other absolute URIs such as urn:x are rejected too.
    """
    target = target.strip()
    parsed = urlparse(target)
    if parsed.scheme not in ("http", "https") or not parsed.netloc or any(c.isspace() for c in target):
        raise UriFormatError(
            f"API key authentication target must be an absolute http(s) URL, got '{target}'.")
    return target


class ConnectionsProvider(ABC):

    @abstractmethod
    async def get_default_connection(self, connection_type: ConnectionType, include_credentials: bool = False) -> Connection:
        """
        Returns the project's default connection of the given type. Credential
        material (the API key) is only populated when include_credentials is True.
        """
        pass

    def resolve_chat_endpoint(self, connection: Connection) -> ChatEndpoint:
        """
        Extracts the endpoint and API key for a direct chat client from a connection.
        Makes no network calls, so a bad connection fails before any client exists.
        """
        match connection.auth_type:
            case AuthenticationType.API_KEY:
                if connection.target is None or not connection.target.strip():
                    raise ConfigurationError("The API key authentication target URI is missing or invalid.")
                endpoint = parse_absolute_uri(connection.target)
                if connection.key is None or not connection.key.get_secret_value():
                    raise ConfigurationError(f"Connection {connection.id} has no API key; request it with credentials included.")
                LOGGER.info(f"Resolved API key connection {connection.id} to endpoint {endpoint}")
                return ChatEndpoint(endpoint=endpoint, api_key=connection.key.get_secret_value())
            case AuthenticationType.ENTRA_ID | AuthenticationType.SAS | AuthenticationType.CUSTOM | AuthenticationType.NONE:
                raise UnsupportedAuthTypeError(connection.auth_type.value)
            case _:
                assert_never(connection.auth_type)

    async def close(self) -> None:
        pass
