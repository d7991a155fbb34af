import asyncio

import pytest

from playscribe.common import JobTimeoutError, Provider, ProviderError, ProviderNetworkError
from playscribe.transcriber.domain import JobPoller, JobPollState, JobStatus


class FakeTime:
    def __init__(self):
        self.now = 0.0
        self.sleeps = []

    def clock(self):
        return self.now

    async def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds


class StatusFeed:
    def __init__(self, statuses):
        self.statuses = list(statuses)
        self.calls = 0

    async def __call__(self, job_id):
        self.calls += 1
        status = self.statuses.pop(0) if len(self.statuses) > 1 else self.statuses[0]
        if isinstance(status, Exception):
            raise status
        return status


def _poller(feed, fake_time, **kwargs):
    return JobPoller(feed, sleep=fake_time.sleep, clock=fake_time.clock, **kwargs)


@pytest.mark.asyncio
async def test_returns_completed_state_with_result():
    fake_time = FakeTime()
    feed = StatusFeed([{"status": "queued"}, {"status": "completed", "text": "hi"}])

    state = await _poller(feed, fake_time).poll("tx-1")

    assert state.status == JobStatus.COMPLETED
    assert state.result == {"status": "completed", "text": "hi"}
    assert state.attempts_made == 2
    assert fake_time.sleeps == [2.0]


@pytest.mark.asyncio
async def test_error_status_is_terminal_failure():
    fake_time = FakeTime()
    feed = StatusFeed([{"status": "error"}])

    state = await _poller(feed, fake_time).poll("tx-1")

    assert state.status == JobStatus.FAILED
    assert state.error == "Transcription failed"
    assert fake_time.sleeps == []


@pytest.mark.asyncio
async def test_gives_up_after_max_attempts():
    fake_time = FakeTime()
    feed = StatusFeed([{"status": "processing"}])

    with pytest.raises(JobTimeoutError) as exc:
        await _poller(feed, fake_time).poll("tx-1")

    assert feed.calls == 60
    assert len(fake_time.sleeps) == 59
    assert exc.value.attempts_made == 60
    assert exc.value.kind.value == "timeout"


@pytest.mark.asyncio
async def test_slow_status_checks_do_not_shorten_the_attempt_budget():
    fake_time = FakeTime()
    feed = StatusFeed([{"status": "processing"}])

    async def slow_status(job_id):
        fake_time.now += 0.3
        return await feed(job_id)

    poller = JobPoller(slow_status, sleep=fake_time.sleep, clock=fake_time.clock)

    with pytest.raises(JobTimeoutError) as exc:
        await poller.poll("tx-1")

    assert feed.calls == 60
    assert exc.value.attempts_made == 60
    assert len(fake_time.sleeps) == 59


@pytest.mark.asyncio
async def test_cancelling_the_caller_stops_polling_while_waiting():
    feed = StatusFeed([{"status": "processing"}])
    task = asyncio.create_task(JobPoller(feed, poll_interval_ms=60_000).poll("tx-1"))

    while feed.calls == 0:
        await asyncio.sleep(0)
    task.cancel()

    with pytest.raises(asyncio.CancelledError):
        await asyncio.wait_for(task, timeout=1)
    assert task.cancelled()
    assert feed.calls == 1


@pytest.mark.asyncio
async def test_network_failure_counts_as_attempt():
    fake_time = FakeTime()
    feed = StatusFeed([ProviderNetworkError(Provider.ASSEMBLYAI)])

    with pytest.raises(JobTimeoutError):
        await _poller(feed, fake_time, max_attempts=5).poll("tx-1")

    assert feed.calls == 5


@pytest.mark.asyncio
async def test_deadline_stops_polling_early():
    fake_time = FakeTime()
    feed = StatusFeed([{"status": "processing"}])

    with pytest.raises(JobTimeoutError):
        await _poller(feed, fake_time, poll_interval_ms=1000, deadline_seconds=3).poll("tx-1")

    assert feed.calls == 4
    assert fake_time.now == 3.0


@pytest.mark.asyncio
async def test_provider_error_on_status_check_propagates():
    fake_time = FakeTime()
    feed = StatusFeed([ProviderError(Provider.ASSEMBLYAI, "Transcript not found", 404)])

    with pytest.raises(ProviderError):
        await _poller(feed, fake_time).poll("tx-1")

    assert feed.calls == 1


def test_terminal_states_do_not_advance():
    state = JobPollState(job_id="tx", max_attempts=3, poll_interval_ms=0)
    done = state.advance({"status": "completed"})

    assert done.advance({"status": "error"}) is done
    assert done.record_attempt() is done
    assert done.attempts_made == 1


def test_unknown_status_keeps_job_processing():
    state = JobPollState(job_id="tx", max_attempts=3, poll_interval_ms=0)

    assert state.advance({"status": "throttled"}).status == JobStatus.PROCESSING
