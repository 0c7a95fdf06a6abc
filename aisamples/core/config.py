import logging
LOGGER = logging.getLogger(__name__)

from dotenv import load_dotenv
from dataclasses import dataclass
import importlib
import os
from aisamples.core.cache import sample_cache
from aisamples.core.errors import ConfigurationError
from aisamples.core.polling import PollingPolicy

load_dotenv()

from typing import Optional, Type, TypeVar
T = TypeVar("T")

DEFAULT_PROVIDER_CLASS = 'aisamples.core.providers.azure.AzureProvider.AzureProvider'
DEFAULT_AGENT_MODEL = 'gpt-4-1106-preview'


@dataclass(frozen=True)
class ProjectConnectionString:
    host: str
    subscription_id: str
    resource_group: str
    project_name: str
    raw: str

    @classmethod
    def parse(cls, value: Optional[str]) -> "ProjectConnectionString":
        """
        Parses '<host>;<subscription id>;<resource group>;<project name>'.
        """
        if value is None or not value.strip():
            raise ConfigurationError("PROJECT_CONNECTION_STRING is not set.")
        parts = [part.strip() for part in value.strip().split(';')]
        if len(parts) != 4 or not all(parts):
            raise ConfigurationError(
                "PROJECT_CONNECTION_STRING must have the form "
                "'<host>;<subscription id>;<resource group>;<project name>'.")
        host, subscription_id, resource_group, project_name = parts
        return cls(host=host, subscription_id=subscription_id, resource_group=resource_group,
                   project_name=project_name, raw=value.strip())


class Config:

    provider = None

    def __init__(self):
        LOGGER.info("Created Config instance")

    @classmethod
    @sample_cache
    def config(cls):
        return Config()

    def get_class_from_env(self, env_var: str, default: str, expected_type: Type[T]) -> T:
        path = os.getenv(env_var, default)
        LOGGER.info(f"Using provider class: {path}")

        try:
            module_path, class_name = path.rsplit(".", 1)
            module = importlib.import_module(module_path)
            cls = getattr(module, class_name)
            LOGGER.info(f"Loaded provider class: {cls}")

            if not issubclass(cls, expected_type):
                raise TypeError(f"Class {path} is not a subclass of {expected_type.__name__}")

            return cls
        except (ImportError, AttributeError, TypeError, ValueError) as e:
            LOGGER.error(f"Failed to load or validate class {path}: {e}")
            raise

    def get_provider(self):
        """
        Have to lazy init the provider here to avoid circular imports.
        """
        if self.provider is None:
            from aisamples.core.providers.provider import Provider
            provider_class = self.get_class_from_env('SAMPLES_PROVIDER_CLASS', DEFAULT_PROVIDER_CLASS, Provider)
            self.provider = provider_class.provider(self)
        return self.provider

    def reset_provider(self):
        self.provider = None

    def get_project_connection_string(self) -> ProjectConnectionString:
        return ProjectConnectionString.parse(os.getenv('PROJECT_CONNECTION_STRING'))

    def get_model_deployment_name(self) -> str:
        name = os.getenv('MODEL_DEPLOYMENT_NAME', '').strip()
        if not name:
            raise ConfigurationError("MODEL_DEPLOYMENT_NAME is not set.")
        return name

    def get_agent_model(self) -> str:
        return os.getenv('AGENT_MODEL', DEFAULT_AGENT_MODEL).strip() or DEFAULT_AGENT_MODEL

    def get_polling_policy(self) -> PollingPolicy:
        try:
            max_attempts = os.getenv('SAMPLES_POLL_MAX_ATTEMPTS')
            timeout = os.getenv('SAMPLES_POLL_TIMEOUT')
            return PollingPolicy(
                interval=float(os.getenv('SAMPLES_POLL_INTERVAL', 0.5)),
                backoff_factor=float(os.getenv('SAMPLES_POLL_BACKOFF', 1.0)),
                max_interval=float(os.getenv('SAMPLES_POLL_MAX_INTERVAL', 5.0)),
                max_attempts=int(max_attempts) if max_attempts else 600,
                timeout=float(timeout) if timeout else 300.0,
            )
        except ValueError as e:
            raise ConfigurationError(f"Invalid polling configuration: {e}") from e

    def get_log_level(self) -> str:
        return os.getenv('SAMPLES_LOG_LEVEL', 'INFO').upper()
