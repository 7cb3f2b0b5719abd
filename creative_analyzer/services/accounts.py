"""Client management and the simulated connection settings."""

import logging
import uuid

from ..config import DB_HOST, DB_NAME, DB_PASS, DB_PORT, DB_USER
from ..models import Client
from ..storage import KeyValueStore, StorageReadError
from ..storage import keys
from .cache import AnalysisCache
from .performance import PerformanceService

logger = logging.getLogger(__name__)

ADMIN = "admin"
CONNECTION_FIELDS = ("host", "port", "user", "pass", "database")


class ClientService:
    """CRUD over clients. Deleting a client removes everything scoped to it."""

    def __init__(self, store: KeyValueStore, cache: AnalysisCache, performance: PerformanceService):
        self.store = store
        self.cache = cache
        self.performance = performance

    def list_clients(self, user: str = ADMIN) -> list[Client]:
        """All clients for the admin, otherwise only the user's own."""
        try:
            clients = [Client.from_dict(c) for c in self.store.get(keys.CLIENTS, [])]
        except (StorageReadError, KeyError, TypeError) as e:
            logger.warning(f"Clients unreadable, treating as empty: {e}")
            return []
        if user == ADMIN:
            return clients
        return [c for c in clients if c.user_id == user]

    def get_client(self, client_id: str | None) -> Client | None:
        return next((c for c in self.list_clients() if c.id == client_id), None)

    def create_client(self, name: str, currency: str = "EUR", logo: str = "", user_id: str = "user") -> Client:
        client = Client(id=uuid.uuid4().hex[:12], name=name, currency=currency, logo=logo, user_id=user_id)
        return self.save_client(client)

    def save_client(self, client: Client) -> Client:
        """Insert, or replace the client with the same id."""
        clients = self.list_clients()
        if any(c.id == client.id for c in clients):
            clients = [client if c.id == client.id else c for c in clients]
        else:
            clients.append(client)
        self.store.put(keys.CLIENTS, [c.to_dict() for c in clients])
        return client

    def delete_client(self, client_id: str) -> bool:
        """Delete a client with its analysis history and performance data."""
        clients = self.list_clients()
        remaining = [c for c in clients if c.id != client_id]
        if len(remaining) == len(clients):
            return False

        self.store.put(keys.CLIENTS, [c.to_dict() for c in remaining])
        removed = self.cache.remove_client(client_id)
        self.performance.clear_client_data(client_id)
        if self.current_client_id() == client_id:
            self.store.delete(keys.CURRENT_CLIENT_ID)
        print(f"Deleted client {client_id} ({removed} history entries)", flush=True)
        return True

    def current_client_id(self) -> str | None:
        try:
            return self.store.get(keys.CURRENT_CLIENT_ID)
        except StorageReadError as e:
            logger.warning(f"Current client unreadable: {e}")
            return None

    def set_current_client(self, client_id: str) -> None:
        self.store.put(keys.CURRENT_CLIENT_ID, client_id)

    def analysis_counts(self) -> dict[str, int]:
        """Number of history entries per existing client."""
        counts = self.cache.counts_by_client()
        return {c.id: counts.get(c.id, 0) for c in self.list_clients()}


class ConnectionService:
    """Simulated database settings. A connection "works" when every field is filled."""

    def __init__(self, store: KeyValueStore):
        self.store = store

    def settings(self) -> dict[str, str]:
        try:
            saved = self.store.get(keys.DB_CONFIG)
        except StorageReadError as e:
            logger.warning(f"Connection settings unreadable: {e}")
            saved = None
        if saved:
            return saved
        return {"host": DB_HOST, "port": DB_PORT, "user": DB_USER, "pass": DB_PASS, "database": DB_NAME}

    def test_connection(self, config: dict[str, str]) -> bool:
        """Validate and persist the settings. Returns the new status."""
        if all(config.get(name) for name in CONNECTION_FIELDS):
            self.store.put(keys.DB_CONFIG, {name: str(config[name]) for name in CONNECTION_FIELDS})
            self.store.put(keys.DB_STATUS, True)
            return True
        self.store.delete(keys.DB_STATUS)
        return False

    def is_ready(self) -> bool:
        try:
            return self.store.get(keys.DB_STATUS) is True
        except StorageReadError:
            return False
