"""Bounded polling of asynchronous provider jobs."""

import asyncio
import time
from collections.abc import Awaitable, Callable

from playscribe.common import JobTimeoutError, ProviderNetworkError, setup_logging

from .models import JobPollState

logger = setup_logging()


class JobPoller:
    """
    Drives a JobPollState from submission to a terminal state.

    Waits ``poll_interval_ms`` between status checks through the injected
    ``sleep`` and stops after ``max_attempts`` checks. A ``deadline_seconds``,
    when given, also stops the loop once the injected ``clock`` passes it;
    otherwise the attempt cap alone bounds polling, however long each check
    takes. A status check that fails in transit still counts as an attempt.
    Submissions are never retried here.
    """

    def __init__(
        self,
        fetch_status: Callable[[str], Awaitable[dict]],
        poll_interval_ms: int = 2000,
        max_attempts: int = 60,
        deadline_seconds: float | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._fetch_status = fetch_status
        self._poll_interval_ms = poll_interval_ms
        self._max_attempts = max_attempts
        self._deadline_seconds = deadline_seconds
        self._sleep = sleep
        self._clock = clock

    async def poll(self, job_id: str) -> JobPollState:
        """
        Polls until the job completes or fails.

        Returns:
            The terminal state; ``result`` holds the completed status document
            and ``error`` the provider's failure message.

        Raises:
            JobTimeoutError: If the attempt or deadline budget runs out first.
            ProviderError: If a status check is answered with a failure status.
        """
        state = JobPollState(
            job_id=job_id,
            max_attempts=self._max_attempts,
            poll_interval_ms=self._poll_interval_ms,
            deadline=(
                None
                if self._deadline_seconds is None
                else self._clock() + self._deadline_seconds
            ),
        )

        while True:
            try:
                body = await self._fetch_status(job_id)
            except ProviderNetworkError:
                state = state.record_attempt()
                logger.warning(
                    "Job status check failed in transit",
                    extra={"job_id": job_id, "attempt": state.attempts_made},
                )
            else:
                state = state.advance(body)
                if state.is_terminal:
                    logger.info(
                        "Job finished",
                        extra={
                            "job_id": job_id,
                            "status": state.status.value,
                            "attempts": state.attempts_made,
                        },
                    )
                    return state

            if state.is_exhausted or self._past_deadline(state):
                logger.error(
                    "Job polling budget exhausted",
                    extra={"job_id": job_id, "attempts": state.attempts_made},
                )
                raise JobTimeoutError(job_id, state.attempts_made, state.max_attempts)

            await self._sleep(self._poll_interval_ms / 1000)

    def _past_deadline(self, state: JobPollState) -> bool:
        return state.deadline is not None and self._clock() >= state.deadline
