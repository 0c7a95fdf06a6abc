from aisamples.core.providers.chat import ChatClient
from typing_extensions import override
from typing import Dict, List
from openai import AsyncOpenAI
import logging

LOGGER = logging.getLogger(__name__)


class OAIAChatClient(ChatClient):
    """
    Chat completions against an OpenAI compatible endpoint, such as a serverless
    model deployment reached through a project connection.
    """

    def __init__(self, openai_client: AsyncOpenAI):
        self.openai_client = openai_client

    @classmethod
    def from_endpoint(cls, endpoint: str, api_key: str) -> "OAIAChatClient":
        LOGGER.info(f"Creating chat client for endpoint {endpoint}")
        return cls(AsyncOpenAI(base_url=endpoint, api_key=api_key))

    @override
    async def complete(self, messages: List[Dict[str, str]], model: str) -> str:
        response = await self.openai_client.chat.completions.create(model=model, messages=messages)
        if not response.choices:
            LOGGER.warning(f"Chat completion {response.id} returned no choices")
            return ""
        return response.choices[0].message.content or ""

    @override
    async def close(self) -> None:
        await self.openai_client.close()
