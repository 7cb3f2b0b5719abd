import pytest

from creative_analyzer.services import (
    AnalysisCache,
    AnalysisService,
    ClientService,
    ConnectionService,
    PerformanceService,
)
from creative_analyzer.storage import InMemoryStore

from .helpers import FakeClock, FakeGemini


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(store, clock):
    return AnalysisCache(store, clock=clock)


@pytest.fixture
def performance(store, cache):
    return PerformanceService(store, cache)


@pytest.fixture
def clients(store, cache, performance):
    return ClientService(store, cache, performance)


@pytest.fixture
def connection(store):
    return ConnectionService(store)


@pytest.fixture
def gemini():
    return FakeGemini()


@pytest.fixture
def analysis(cache, clients, connection, gemini):
    return AnalysisService(cache, clients, connection, gemini, clock=lambda: "2024-01-01T10:00:00.000Z")


@pytest.fixture
def ready(connection, clients):
    """Connection tested and one client created."""
    connection.test_connection({"host": "localhost", "port": "5432", "user": "u", "pass": "p", "database": "ads"})
    return clients.create_client("Acme", currency="EUR")
