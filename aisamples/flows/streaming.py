import logging
LOGGER = logging.getLogger(__name__)

import asyncio
from typing import List, Optional, TextIO
from aisamples.core.models import MessageContentUpdate, MessageRole
from aisamples.core.render import banner
from aisamples.core.streaming import consume_updates

AGENT_NAME = "My Friendly Test Assistant"
AGENT_INSTRUCTIONS = "You politely help with math questions. Use the code interpreter tool when asked to visualize numbers."
PROMPT = "Hi, Assistant! Draw a graph for a line with a slope of 4 and y-intercept of 9."


async def run_streaming_sample(provider, config, out: Optional[TextIO] = None,
                               cancel_event: Optional[asyncio.Event] = None,
                               cleanup: bool = False, prompt: str = PROMPT) -> List[MessageContentUpdate]:
    banner("Azure AI Streaming Sample", out)
    agents = provider.agents

    agent = await agents.create_agent(
        model=config.get_agent_model(),
        name=AGENT_NAME,
        instructions=AGENT_INSTRUCTIONS,
        tools=["code_interpreter"],
    )
    thread = await agents.create_thread()
    try:
        message = await agents.create_message(thread.id, MessageRole.USER, prompt)
        LOGGER.debug(f"Posted message {message.id} to thread {thread.id}")

        updates = agents.create_run_streaming(thread.id, agent.id)
        return await consume_updates(updates, out, cancel_event)
    finally:
        if cleanup:
            await agents.delete_thread(thread.id)
            await agents.delete_agent(agent.id)
