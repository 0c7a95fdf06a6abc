import logging
LOGGER = logging.getLogger(__name__)

import asyncio
import sys
from typing import AsyncIterator, List, Optional, TextIO
from aisamples.core.errors import ContractViolationError, OperationCancelledError
from aisamples.core.models import MessageContentUpdate, RunUpdate, StreamingUpdate, UpdateKind
from aisamples.core.render import RUN_STARTED_BANNER, render_update


async def _discard(task: asyncio.Future) -> None:
    task.cancel()
    await asyncio.gather(task, return_exceptions=True)


async def _next_update(iterator: AsyncIterator[StreamingUpdate],
                       cancel_event: Optional[asyncio.Event]) -> StreamingUpdate:
    """
    Waits for the next update or for cancel_event, whichever comes first.
    Raises StopAsyncIteration at the end of the stream.
    """
    if cancel_event is None:
        return await iterator.__anext__()
    next_task = asyncio.ensure_future(iterator.__anext__())
    cancel_task = asyncio.ensure_future(cancel_event.wait())
    try:
        done, _ = await asyncio.wait({next_task, cancel_task}, return_when=asyncio.FIRST_COMPLETED)
    except asyncio.CancelledError:
        await _discard(next_task)
        raise
    finally:
        cancel_task.cancel()
    if next_task in done:
        return next_task.result()
    # the iterator must be idle before it can be closed
    await _discard(next_task)
    raise OperationCancelledError("Stream consumption was cancelled")


async def consume_updates(updates: AsyncIterator[StreamingUpdate], out: Optional[TextIO] = None,
                          cancel_event: Optional[asyncio.Event] = None) -> List[MessageContentUpdate]:
    """
    Pulls updates until the service ends the stream, writing content as it
    arrives. The run created update must come once, before any content.
    Returns the content updates in arrival order.

    When cancel_event is set the stream is closed and OperationCancelledError
    raised, also while waiting on a stream that has gone quiet.
    """
    out = out or sys.stdout
    run_started = False
    received = []
    iterator = updates.__aiter__()
    try:
        while True:
            try:
                update = await _next_update(iterator, cancel_event)
            except StopAsyncIteration:
                break
            if cancel_event is not None and cancel_event.is_set():
                raise OperationCancelledError("Stream consumption was cancelled")
            LOGGER.debug(f"Update: {update.kind}")
            match update:
                case RunUpdate(kind=UpdateKind.RUN_CREATED):
                    if run_started:
                        raise ContractViolationError(f"Run {update.run.id} was reported created twice")
                    run_started = True
                    print(RUN_STARTED_BANNER, file=out)
                case MessageContentUpdate():
                    if not run_started:
                        raise ContractViolationError("Message content arrived before the run was created")
                    render_update(update, out)
                    received.append(update)
                case _:
                    pass
    finally:
        aclose = getattr(iterator, 'aclose', None)
        if aclose is not None:
            await aclose()
    if received:
        print(file=out)
    return received
