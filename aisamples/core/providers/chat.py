from abc import ABC, abstractmethod
from typing import Dict, List
import logging
LOGGER = logging.getLogger(__name__)


class ChatClient(ABC):

    @abstractmethod
    async def complete(self, messages: List[Dict[str, str]], model: str) -> str:
        """
        Sends a chat completion request and returns the reply text.
        Messages are {"role": ..., "content": ...} dicts.
        """
        pass

    async def close(self) -> None:
        pass
