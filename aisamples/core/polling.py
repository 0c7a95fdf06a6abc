import logging
LOGGER = logging.getLogger(__name__)

import asyncio
import time
from dataclasses import dataclass
from typing import Optional
from aisamples.core.errors import ConfigurationError, OperationCancelledError, RunTimeoutError
from aisamples.core.models import Run


@dataclass(frozen=True)
class PollingPolicy:
    """
    How often and for how long to poll a run.

    The wait before attempt n (starting at 1) is interval * backoff_factor ** (n - 1),
    capped at max_interval. A backoff_factor of 1.0 gives a fixed interval.
    max_attempts and timeout may be None to disable that bound, but not both.
    """
    interval: float = 0.5
    backoff_factor: float = 1.0
    max_interval: float = 5.0
    max_attempts: Optional[int] = 600
    timeout: Optional[float] = 300.0

    def __post_init__(self):
        if self.interval < 0 or self.max_interval < 0:
            raise ConfigurationError("Polling intervals must not be negative")
        if self.backoff_factor < 1.0:
            raise ConfigurationError("Polling backoff factor must be at least 1.0")
        if self.max_attempts is not None and self.max_attempts < 1:
            raise ConfigurationError("Polling max attempts must be at least 1")
        if self.max_attempts is None and self.timeout is None:
            raise ConfigurationError("Polling needs a max attempts or a timeout bound")

    def delay(self, attempt: int) -> float:
        return min(self.interval * (self.backoff_factor ** (attempt - 1)), self.max_interval)


async def _wait(delay: float, cancel_event: Optional[asyncio.Event]) -> None:
    if cancel_event is None:
        await asyncio.sleep(delay)
        return
    try:
        await asyncio.wait_for(cancel_event.wait(), timeout=delay)
    except asyncio.TimeoutError:
        return
    raise OperationCancelledError("Polling was cancelled")


async def poll_run(agents, thread_id: str, run_id: str, policy: Optional[PollingPolicy] = None,
                   cancel_event: Optional[asyncio.Event] = None) -> Run:
    """
    Fetches the run until its status leaves queued/in_progress and returns the last
    fetched run. Raises RunTimeoutError when the policy's attempts or timeout run out and
    OperationCancelledError when cancel_event is set.
    """
    policy = policy or PollingPolicy()
    started = time.monotonic()
    attempt = 0
    while True:
        attempt += 1
        if cancel_event is not None and cancel_event.is_set():
            raise OperationCancelledError("Polling was cancelled")

        delay = policy.delay(attempt)
        if policy.timeout is not None:
            remaining = policy.timeout - (time.monotonic() - started)
            if remaining <= 0:
                raise RunTimeoutError(run_id, attempt - 1, time.monotonic() - started)
            delay = min(delay, remaining)
        await _wait(delay, cancel_event)

        run = await agents.get_run(thread_id=thread_id, run_id=run_id)
        LOGGER.debug(f"Run {run_id} attempt {attempt}: {run.status.value}")
        if not run.status.is_pending:
            LOGGER.info(f"Run {run_id} finished with status {run.status.value} after {attempt} attempts")
            return run

        if policy.max_attempts is not None and attempt >= policy.max_attempts:
            raise RunTimeoutError(run_id, attempt, time.monotonic() - started)
