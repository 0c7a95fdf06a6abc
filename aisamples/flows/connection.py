import logging
LOGGER = logging.getLogger(__name__)

import sys
from typing import Optional, TextIO
from aisamples.core.models import ConnectionType

SYSTEM_MESSAGE = "You are a helpful assistant."
USER_MESSAGE = "How many feet are in a mile?"


async def run_connection_sample(provider, config, out: Optional[TextIO] = None, **kwargs) -> str:
    """
    Resolves the project's default serverless connection and asks its model
    deployment a question directly, without an agent.
    """
    model = config.get_model_deployment_name()
    connection = await provider.connections.get_default_connection(ConnectionType.SERVERLESS, include_credentials=True)
    endpoint = provider.connections.resolve_chat_endpoint(connection)
    LOGGER.info(f"Asking {model} directly through connection {connection.id}")

    chat = provider.create_chat_client(endpoint)
    try:
        reply = await chat.complete(
            messages=[
                {"role": "system", "content": SYSTEM_MESSAGE},
                {"role": "user", "content": USER_MESSAGE},
            ],
            model=model,
        )
    finally:
        await chat.close()
    print(reply, file=out or sys.stdout)
    return reply
