"""Shared fixtures: a scripted provider, a controllable clock, a gateway."""

import pytest

from bff.gateway import Gateway
from bff.services.cache import ResultCache
from bff.services.provider import ProviderReply
from bff.services.retry import RetryPolicy


class FakeProvider:
    """Returns (or raises) scripted outcomes in order and records requests.

    Once the script runs out, the last outcome is repeated.
    """

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.requests = []

    @property
    def calls(self) -> int:
        return len(self.requests)

    async def generate(self, request):
        self.requests.append(request)
        outcome = self.outcomes.pop(0) if len(self.outcomes) > 1 else self.outcomes[0]
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


class FakeClock:
    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingSleep:
    """Stands in for asyncio.sleep; remembers each requested delay."""

    def __init__(self):
        self.delays = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return ResultCache(ttl_seconds=3600, clock=clock)


@pytest.fixture
def sleep():
    return RecordingSleep()


@pytest.fixture
def make_gateway(cache, sleep):
    def _make(*outcomes):
        provider = FakeProvider(*outcomes) if outcomes else FakeProvider(ProviderReply())
        return Gateway(
            provider=provider,
            cache=cache,
            retry_policy=RetryPolicy(max_attempts=3, initial_delay_ms=1000),
            sleep=sleep,
        )
    return _make
