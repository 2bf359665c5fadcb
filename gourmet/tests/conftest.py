import pytest

from gourmet.events.Event_Bus import EventBus
from gourmet.infra.Gourmet_Repository import GourmetRepository
from gourmet.infra.Http_Backend import HttpBackend
from gourmet.infra.Local_Cache import LocalCache
from gourmet.tests.fakes import BACKEND_URL, FakeGourmetServer, FixedClock


@pytest.fixture
def server():
    return FakeGourmetServer()


@pytest.fixture
def backend(server):
    return HttpBackend(BACKEND_URL, transport=server.transport())


@pytest.fixture
def cache(tmp_path):
    return LocalCache(tmp_path / "cache")


@pytest.fixture
def bus():
    return EventBus()


@pytest.fixture
def clock():
    return FixedClock()


@pytest.fixture
def repo(backend, cache, bus, clock):
    return GourmetRepository(backend, cache, clock=clock, bus=bus, category_delay=0.05)
