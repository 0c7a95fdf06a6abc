import logging
LOGGER = logging.getLogger(__name__)

import asyncio
from typing import List, Optional, TextIO
from aisamples.core.errors import ContractViolationError
from aisamples.core.models import Message, MessageRole
from aisamples.core.polling import poll_run
from aisamples.core.render import banner, render_messages

AGENT_NAME = "Math Tutor"
AGENT_INSTRUCTIONS = "You are a personal math tutor. Write and run code to answer math questions."
PROMPT = "I need to solve the equation `3x + 11 = 14`. Can you help me?"
ADDITIONAL_INSTRUCTIONS = "Please address the user as Jane Doe. The user has a premium account."


async def run_basic_sample(provider, config, out: Optional[TextIO] = None,
                           cancel_event: Optional[asyncio.Event] = None,
                           cleanup: bool = False, prompt: str = PROMPT) -> List[Message]:
    """
    Creates an agent and a thread, posts a message, runs the agent by polling
    the run until it finishes and prints the thread's messages, newest first.
    """
    banner("Azure AI Basic Sample", out)
    agents = provider.agents

    agent = await agents.create_agent(
        model=config.get_agent_model(),
        name=AGENT_NAME,
        instructions=AGENT_INSTRUCTIONS,
        tools=["code_interpreter"],
    )
    listed = await agents.list_agents()
    LOGGER.info(f"Agent {agent.id} created, {len(listed)} agents listed")

    thread = await agents.create_thread()
    try:
        message = await agents.create_message(thread.id, MessageRole.USER, prompt)

        messages = await agents.list_messages(thread.id)
        if not messages or messages[0].id != message.id:
            raise ContractViolationError(f"Newest message on thread {thread.id} is not the message {message.id} just created")

        run = await agents.create_run(thread.id, agent.id, additional_instructions=ADDITIONAL_INSTRUCTIONS)
        run = await poll_run(agents, thread.id, run.id, config.get_polling_policy(), cancel_event)
        if run.last_error:
            LOGGER.warning(f"Run {run.id} ended {run.status.value}: {run.last_error}")

        messages = await agents.list_messages(thread.id)
        render_messages(messages, out)
        return messages
    finally:
        if cleanup:
            await agents.delete_thread(thread.id)
            await agents.delete_agent(agent.id)
