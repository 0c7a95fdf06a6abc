from abc import ABC, abstractmethod
from typing import AsyncIterator, List, Optional
from aisamples.core.models import Agent, Message, MessageRole, Run, StreamingUpdate, Thread
import logging
LOGGER = logging.getLogger(__name__)


class AgentsProvider(ABC):
    """
    Agents, threads, messages and runs on the remote agent service.
    Implementations map the SDK responses to the records in aisamples.core.models
    and let SDK errors propagate.
    """

    @abstractmethod
    async def create_agent(self, model: str, name: str, instructions: str, tools: Optional[List[str]] = None) -> Agent:
        """
        Creates an agent. Tools are given by type name, e.g. "code_interpreter".
        """
        pass

    @abstractmethod
    async def list_agents(self) -> List[Agent]:
        pass

    @abstractmethod
    async def delete_agent(self, agent_id: str) -> bool:
        """
        Deletes an agent by its id.
        Don't throw an exception if it does not exist, just return False.
        """
        pass

    @abstractmethod
    async def create_thread(self) -> Thread:
        pass

    @abstractmethod
    async def delete_thread(self, thread_id: str) -> bool:
        """
        Deletes a thread by its id.
        Don't throw an exception if it does not exist, just return False.
        """
        pass

    @abstractmethod
    async def create_message(self, thread_id: str, role: MessageRole, content: str) -> Message:
        pass

    @abstractmethod
    async def list_messages(self, thread_id: str) -> List[Message]:
        """
        Returns the messages of a thread, newest first.
        """
        pass

    @abstractmethod
    async def create_run(self, thread_id: str, agent_id: str, additional_instructions: Optional[str] = None) -> Run:
        pass

    @abstractmethod
    async def get_run(self, thread_id: str, run_id: str) -> Run:
        pass

    @abstractmethod
    def create_run_streaming(self, thread_id: str, agent_id: str,
                             additional_instructions: Optional[str] = None) -> AsyncIterator[StreamingUpdate]:
        """
        Starts a run and returns its updates as an async iterator. The iterator is
        lazy, finite and can only be consumed once; calling aclose() on it closes
        the underlying stream.
        """
        pass

    async def close(self) -> None:
        pass
