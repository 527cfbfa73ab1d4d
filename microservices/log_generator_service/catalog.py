"""
Event Catalog

Bounded pools of representative values used to make generated events look
realistic without any external data source. Pools are tuples and never
change after construction.
"""

import random
from typing import Dict, Optional, Sequence, Tuple, TypeVar

from .protocols import ConfigurationError

T = TypeVar("T")


DEFAULT_POOLS: Dict[str, Tuple[str, ...]] = {
    "users": ("alice.smith", "bob.jones", "carol.brown", "david.wilson", "emma.davis"),
    "operations": (
        "GetUser", "CreateOrder", "UpdateProfile", "DeleteItem",
        "SearchProducts", "ProcessPayment", "SendEmail", "UploadFile",
    ),
    "services": (
        "UserService", "OrderService", "PaymentService",
        "NotificationService", "FileService", "SearchService",
    ),
    "databases": ("UserDB", "OrderDB", "ProductDB", "LoggingDB", "CacheDB"),
    "endpoints": ("/api/users", "/api/orders", "/api/products", "/api/payments", "/api/notifications"),
    "payment_methods": ("CreditCard", "PayPal", "BankTransfer", "ApplePay"),
    "search_terms": ("laptop", "smartphone", "headphones", "keyboard", "monitor"),
    "job_names": ("DataBackup", "LogCleanup", "IndexRebuild", "ReportGeneration"),
}


class EventCatalog:
    """
    Named immutable pools plus uniform selection.

    Args:
        pools: Pool name -> values; missing names fall back to the defaults
        rng: Randomness source (shared with the generators for seeding)

    Raises:
        ConfigurationError: if any pool is empty
    """

    def __init__(
        self,
        pools: Optional[Dict[str, Sequence[str]]] = None,
        rng: Optional[random.Random] = None,
    ):
        merged = dict(DEFAULT_POOLS)
        for name, values in (pools or {}).items():
            merged[name] = tuple(values)
        self._pools: Dict[str, Tuple[str, ...]] = merged
        self.rng = rng or random.Random()
        self.validate()

    def validate(self) -> None:
        for name, values in self._pools.items():
            if not values:
                raise ConfigurationError(f"catalog.{name}", "pool must not be empty")

    @property
    def pool_names(self) -> Tuple[str, ...]:
        return tuple(self._pools)

    def pool(self, name: str) -> Tuple[str, ...]:
        return self._pools[name]

    def pick(self, pool: Sequence[T]) -> T:
        """Uniformly random element of a non-empty pool"""
        return pool[self.rng.randrange(len(pool))]

    # Shorthands for the standard pools

    @property
    def users(self) -> Tuple[str, ...]:
        return self._pools["users"]

    @property
    def operations(self) -> Tuple[str, ...]:
        return self._pools["operations"]

    @property
    def services(self) -> Tuple[str, ...]:
        return self._pools["services"]

    @property
    def databases(self) -> Tuple[str, ...]:
        return self._pools["databases"]

    @property
    def endpoints(self) -> Tuple[str, ...]:
        return self._pools["endpoints"]

    @property
    def payment_methods(self) -> Tuple[str, ...]:
        return self._pools["payment_methods"]

    @property
    def search_terms(self) -> Tuple[str, ...]:
        return self._pools["search_terms"]

    @property
    def job_names(self) -> Tuple[str, ...]:
        return self._pools["job_names"]
