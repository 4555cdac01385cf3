"""Pytest fixtures for all tests."""

import pytest

from shortduid.services.generator import ShortDUID

# Mon, 01 Jun 2015 00:00:00 GMT
EPOCH_START = 1433116800 * 1000
SALT = "39622feb2b3e7aa7208f50f45ec36fd513baadad6977b53295a3b28aeaed4a54"


class FakeClock:
    """Settable millisecond clock source."""

    def __init__(self, now=EPOCH_START + 1000):
        self.now = now

    def __call__(self):
        return self.now


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def duid_instance1():
    return ShortDUID(123, SALT, EPOCH_START)


@pytest.fixture
def duid_instance2():
    return ShortDUID(12, SALT, EPOCH_START)


@pytest.fixture
def pinned_duid(fake_clock):
    """Generator driven by a fake clock."""
    return ShortDUID(123, SALT, EPOCH_START, clock_source=fake_clock)
