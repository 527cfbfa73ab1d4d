"""
Category Generators

One generator per EventCategory. Each returns a complete SyntheticEvent and
never raises: simulated faults are carried as payload. All draws come from
the catalog's randomness source so a seeded catalog reproduces a run.
"""

import random
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, Optional, Tuple

from .catalog import EventCatalog
from .models import EventCategory, Severity, SimulatedFault, SyntheticEvent
from .protocols import ConfigurationError

Scenario = Callable[[], SyntheticEvent]


class EventGenerator:
    """
    Synthesizes events for every category.

    Args:
        catalog: Value pools and randomness source
        payment_success_rate: Probability that a payment scenario succeeds
        performance_warning_ms: Durations above this report Warning
        performance_info_ms: Durations from this up to the warning
            threshold report Info; below it, Debug

    Raises:
        ConfigurationError: on a rate outside [0, 1] or inverted thresholds
    """

    def __init__(
        self,
        catalog: Optional[EventCatalog] = None,
        payment_success_rate: float = 0.97,
        performance_warning_ms: int = 2000,
        performance_info_ms: int = 1000,
    ):
        if not 0.0 <= payment_success_rate <= 1.0:
            raise ConfigurationError(
                "payment_success_rate", f"must be within [0, 1], got {payment_success_rate}"
            )
        if performance_info_ms >= performance_warning_ms:
            raise ConfigurationError(
                "performance thresholds",
                f"info threshold {performance_info_ms}ms must be below warning threshold {performance_warning_ms}ms",
            )

        self.catalog = catalog or EventCatalog()
        self.payment_success_rate = payment_success_rate
        self.performance_warning_ms = performance_warning_ms
        self.performance_info_ms = performance_info_ms

        self._dispatch: Dict[EventCategory, Scenario] = {
            EventCategory.INFO: self.generate_info,
            EventCategory.WARNING: self.generate_warning,
            EventCategory.ERROR: self.generate_error,
            EventCategory.DEBUG: self.generate_debug,
            EventCategory.PERFORMANCE: self.generate_performance,
            EventCategory.SECURITY: self.generate_security,
            EventCategory.BUSINESS: self.generate_business,
            EventCategory.SYSTEM: self.generate_system,
        }

        self._warning_scenarios: Tuple[Scenario, ...] = (
            self._high_memory,
            self._slow_query,
            self._rate_limit_approaching,
            self._low_disk,
            self._connection_pool_exhaustion,
        )
        self._error_scenarios: Tuple[Scenario, ...] = (
            self._upstream_http_failure,
            self._database_timeout,
            self._validation_failure,
            self._unauthorized_access,
        )
        self._debug_scenarios: Tuple[Scenario, ...] = (
            self._cache_hit,
            self._sql_executed,
            self._http_request_received,
            self._configuration_loaded,
        )
        self._security_scenarios: Tuple[Scenario, ...] = (
            self._authentication_succeeded,
            self._login_failed,
            self._password_changed,
            self._permission_denied,
            self._session_created,
        )
        self._business_scenarios: Tuple[Scenario, ...] = (
            self._order_created,
            self._payment_processed,
            self._inventory_updated,
            self._search_performed,
        )
        self._system_scenarios: Tuple[Scenario, ...] = (
            self._health_check,
            self._scheduled_job_completed,
            self._resource_threshold_exceeded,
            self._configuration_reloaded,
            self._connection_pool_status,
        )

    @property
    def rng(self) -> random.Random:
        return self.catalog.rng

    def generate(self, category: EventCategory) -> SyntheticEvent:
        """Synthesize one event for the given category"""
        return self._dispatch[category]()

    # =========================================================================
    # Helpers
    # =========================================================================

    def _between(self, low: int, high: int) -> int:
        """Random int in [low, high)"""
        return self.rng.randrange(low, high)

    def _hex_id(self, length: int) -> str:
        return format(self.rng.getrandbits(length * 4), f"0{length}x")

    def _event(
        self,
        category: EventCategory,
        severity: Severity,
        template: str,
        fault: Optional[SimulatedFault] = None,
        **properties,
    ) -> SyntheticEvent:
        return SyntheticEvent(
            category=category,
            severity=severity,
            message_template=template,
            properties=properties,
            fault=fault,
        )

    # =========================================================================
    # Info
    # =========================================================================

    def generate_info(self) -> SyntheticEvent:
        """Successful user-triggered operation"""
        return self._event(
            EventCategory.INFO,
            Severity.INFO,
            "User {User} performed {Operation} via {Service} - RequestId: {RequestId} "
            "Duration: {Duration}ms Status: {Status}",
            User=self.catalog.pick(self.catalog.users),
            Operation=self.catalog.pick(self.catalog.operations),
            Service=self.catalog.pick(self.catalog.services),
            RequestId=self._hex_id(8),
            Duration=self._between(50, 500),
            Status="Success",
        )

    # =========================================================================
    # Warning
    # =========================================================================

    def generate_warning(self) -> SyntheticEvent:
        return self.catalog.pick(self._warning_scenarios)()

    def _high_memory(self) -> SyntheticEvent:
        return self._event(
            EventCategory.WARNING,
            Severity.WARNING,
            "High memory usage detected: {MemoryUsage}% - Threshold: {Threshold}%",
            MemoryUsage=self._between(80, 95),
            Threshold=80,
        )

    def _slow_query(self) -> SyntheticEvent:
        return self._event(
            EventCategory.WARNING,
            Severity.WARNING,
            "Slow database query detected: {Database} took {Duration}ms - Query: {Query}",
            Database=self.catalog.pick(self.catalog.databases),
            Duration=self._between(2000, 5000),
            Query="SELECT * FROM large_table",
        )

    def _rate_limit_approaching(self) -> SyntheticEvent:
        return self._event(
            EventCategory.WARNING,
            Severity.WARNING,
            "API rate limit approaching: {Endpoint} has {RequestCount} requests in last minute",
            Endpoint=self.catalog.pick(self.catalog.endpoints),
            RequestCount=self._between(800, 950),
        )

    def _low_disk(self) -> SyntheticEvent:
        return self._event(
            EventCategory.WARNING,
            Severity.WARNING,
            "Disk space running low: {DiskUsage}% used on volume {Volume}",
            DiskUsage=self._between(85, 95),
            Volume="/data",
        )

    def _connection_pool_exhaustion(self) -> SyntheticEvent:
        return self._event(
            EventCategory.WARNING,
            Severity.WARNING,
            "Connection pool exhaustion: {ActiveConnections}/{MaxConnections} connections active",
            ActiveConnections=self._between(18, 20),
            MaxConnections=20,
        )

    # =========================================================================
    # Error
    # =========================================================================

    def generate_error(self) -> SyntheticEvent:
        return self.catalog.pick(self._error_scenarios)()

    def _upstream_http_failure(self) -> SyntheticEvent:
        return self._event(
            EventCategory.ERROR,
            Severity.ERROR,
            "External API call failed: {Endpoint} - Retry attempt {AttemptNumber}",
            fault=SimulatedFault(kind="HttpRequestError", message="HTTP 503 Service Unavailable"),
            Endpoint=self.catalog.pick(self.catalog.endpoints),
            AttemptNumber=self._between(1, 4),
        )

    def _database_timeout(self) -> SyntheticEvent:
        return self._event(
            EventCategory.ERROR,
            Severity.ERROR,
            "Database operation timeout: {Database} - Operation: {Operation} Duration: {Duration}ms",
            fault=SimulatedFault(kind="TimeoutError", message="Operation timed out"),
            Database=self.catalog.pick(self.catalog.databases),
            Operation=self.catalog.pick(self.catalog.operations),
            Duration=self._between(5000, 10000),
        )

    def _validation_failure(self) -> SyntheticEvent:
        return self._event(
            EventCategory.ERROR,
            Severity.ERROR,
            "Input validation error for user {User} - Field: {Field} Value: {Value}",
            fault=SimulatedFault(kind="ValidationError", message="Validation failed"),
            User=self.catalog.pick(self.catalog.users),
            Field="email",
            Value="invalid-email-format",
        )

    def _unauthorized_access(self) -> SyntheticEvent:
        return self._event(
            EventCategory.ERROR,
            Severity.ERROR,
            "Unauthorized access attempt: User {User} tried to access {Resource}",
            fault=SimulatedFault(kind="UnauthorizedAccessError", message="Access denied"),
            User=self.catalog.pick(self.catalog.users),
            Resource="/admin/users",
        )

    # =========================================================================
    # Debug
    # =========================================================================

    def generate_debug(self) -> SyntheticEvent:
        return self.catalog.pick(self._debug_scenarios)()

    def _cache_hit(self) -> SyntheticEvent:
        return self._event(
            EventCategory.DEBUG,
            Severity.DEBUG,
            "Cache hit for key: {CacheKey} - TTL: {TTL}s",
            CacheKey=f"user_{self._between(1000, 9999)}",
            TTL=self._between(300, 3600),
        )

    def _sql_executed(self) -> SyntheticEvent:
        return self._event(
            EventCategory.DEBUG,
            Severity.DEBUG,
            "SQL query executed: {Query} - Parameters: {Parameters} Rows: {RowCount}",
            Query="SELECT * FROM users WHERE active = @active",
            Parameters={"active": True},
            RowCount=self._between(1, 100),
        )

    def _http_request_received(self) -> SyntheticEvent:
        return self._event(
            EventCategory.DEBUG,
            Severity.DEBUG,
            "HTTP request received: {Method} {Path} - UserAgent: {UserAgent}",
            Method="GET",
            Path=self.catalog.pick(self.catalog.endpoints),
            UserAgent="Mozilla/5.0 (compatible; ApiClient/1.0)",
        )

    def _configuration_loaded(self) -> SyntheticEvent:
        return self._event(
            EventCategory.DEBUG,
            Severity.DEBUG,
            "Configuration loaded: {ConfigSection} - Values: {ConfigCount} items",
            ConfigSection="DatabaseSettings",
            ConfigCount=self._between(5, 15),
        )

    # =========================================================================
    # Performance
    # =========================================================================

    def classify_performance(self, duration_ms: int) -> Severity:
        """Severity reported for a performance sample of this duration"""
        if duration_ms > self.performance_warning_ms:
            return Severity.WARNING
        if duration_ms >= self.performance_info_ms:
            return Severity.INFO
        return Severity.DEBUG

    def generate_performance(self) -> SyntheticEvent:
        duration = self._between(10, 3000)
        return self._event(
            EventCategory.PERFORMANCE,
            self.classify_performance(duration),
            "Performance metrics: {Service}.{Operation} - Duration: {Duration}ms "
            "CPU: {CpuUsage}% Memory: {MemoryUsage}MB",
            Service=self.catalog.pick(self.catalog.services),
            Operation=self.catalog.pick(self.catalog.operations),
            Duration=duration,
            CpuUsage=self._between(10, 80),
            MemoryUsage=self._between(50, 200),
        )

    # =========================================================================
    # Security
    # =========================================================================

    def generate_security(self) -> SyntheticEvent:
        return self.catalog.pick(self._security_scenarios)()

    def _authentication_succeeded(self) -> SyntheticEvent:
        return self._event(
            EventCategory.SECURITY,
            Severity.INFO,
            "Authentication successful: User {User} from IP {IpAddress} - Method: {Method}",
            User=self.catalog.pick(self.catalog.users),
            IpAddress=f"192.168.{self._between(1, 255)}.{self._between(1, 255)}",
            Method="JWT",
        )

    def _login_failed(self) -> SyntheticEvent:
        return self._event(
            EventCategory.SECURITY,
            Severity.WARNING,
            "Failed login attempt: IP {IpAddress} - Attempt: {AttemptNumber}/5 - Reason: Invalid credentials",
            IpAddress=f"10.0.{self._between(1, 255)}.{self._between(1, 255)}",
            AttemptNumber=self._between(1, 6),
        )

    def _password_changed(self) -> SyntheticEvent:
        last_login = datetime.now(timezone.utc) - timedelta(days=self._between(1, 30))
        return self._event(
            EventCategory.SECURITY,
            Severity.INFO,
            "Password changed: User {User} - Method: Self-service - Previous login: {LastLogin}",
            User=self.catalog.pick(self.catalog.users),
            LastLogin=last_login.isoformat(),
        )

    def _permission_denied(self) -> SyntheticEvent:
        return self._event(
            EventCategory.SECURITY,
            Severity.WARNING,
            "Permission denied: User {User} attempted to access {Resource} - Role: User Required: Admin",
            User=self.catalog.pick(self.catalog.users),
            Resource=self.catalog.pick(self.catalog.endpoints),
        )

    def _session_created(self) -> SyntheticEvent:
        expires_at = datetime.now(timezone.utc) + timedelta(hours=8)
        return self._event(
            EventCategory.SECURITY,
            Severity.INFO,
            "Session created: SessionId {SessionId} - User {User} - Expires: {ExpiresAt}",
            SessionId=self._hex_id(16),
            User=self.catalog.pick(self.catalog.users),
            ExpiresAt=expires_at.isoformat(),
        )

    # =========================================================================
    # Business
    # =========================================================================

    def generate_business(self) -> SyntheticEvent:
        return self.catalog.pick(self._business_scenarios)()

    def _order_created(self) -> SyntheticEvent:
        return self._event(
            EventCategory.BUSINESS,
            Severity.INFO,
            "Order created: OrderId {OrderId} by {User} - Amount: ${Amount} Items: {ItemCount}",
            OrderId=f"ORD-{self._between(100000, 999999)}",
            User=self.catalog.pick(self.catalog.users),
            Amount=f"{self._between(1000, 50000) / 100.0:.2f}",
            ItemCount=self._between(1, 5),
        )

    def payment_succeeds(self) -> bool:
        """Bernoulli draw for the payment outcome, separate from scenario selection"""
        return self.rng.random() < self.payment_success_rate

    def _payment_processed(self) -> SyntheticEvent:
        payment_id = f"PAY-{self._between(100000, 999999)}"
        amount = f"{self._between(500, 20000) / 100.0:.2f}"
        method = self.catalog.pick(self.catalog.payment_methods)

        if self.payment_succeeds():
            return self._event(
                EventCategory.BUSINESS,
                Severity.INFO,
                "Payment processed: PaymentId {PaymentId} - Amount: ${Amount} "
                "Method: {PaymentMethod} Status: Success",
                PaymentId=payment_id,
                Amount=amount,
                PaymentMethod=method,
            )

        return self._event(
            EventCategory.BUSINESS,
            Severity.ERROR,
            "Payment failed: PaymentId {PaymentId} - Amount: ${Amount} "
            "Method: {PaymentMethod} Reason: Declined",
            fault=SimulatedFault(kind="PaymentDeclinedError", message="Payment declined"),
            PaymentId=payment_id,
            Amount=amount,
            PaymentMethod=method,
        )

    def _inventory_updated(self) -> SyntheticEvent:
        quantity = self._between(1, 100)
        return self._event(
            EventCategory.BUSINESS,
            Severity.INFO,
            "Inventory updated: ProductId {ProductId} - Quantity changed by {QuantityChange} "
            "New stock: {NewStock}",
            ProductId=f"PROD-{self._between(1000, 9999)}",
            QuantityChange=f"+{quantity}" if quantity > 50 else f"-{quantity}",
            NewStock=self._between(0, 500),
        )

    def _search_performed(self) -> SyntheticEvent:
        return self._event(
            EventCategory.BUSINESS,
            Severity.INFO,
            "Search performed: User {User} searched for '{SearchTerm}' - Results: {ResultCount} "
            "Duration: {Duration}ms",
            User=self.catalog.pick(self.catalog.users),
            SearchTerm=self.catalog.pick(self.catalog.search_terms),
            ResultCount=self._between(0, 150),
            Duration=self._between(50, 300),
        )

    # =========================================================================
    # System
    # =========================================================================

    def generate_system(self) -> SyntheticEvent:
        return self.catalog.pick(self._system_scenarios)()

    def _health_check(self) -> SyntheticEvent:
        return self._event(
            EventCategory.SYSTEM,
            Severity.INFO,
            "Service health check: {ServiceName} - Status: Healthy Response time: {ResponseTime}ms",
            ServiceName=self.catalog.pick(self.catalog.services),
            ResponseTime=self._between(10, 100),
        )

    def _scheduled_job_completed(self) -> SyntheticEvent:
        return self._event(
            EventCategory.SYSTEM,
            Severity.INFO,
            "Scheduled job completed: {JobName} - Duration: {Duration}s Items processed: {ItemCount}",
            JobName=self.catalog.pick(self.catalog.job_names),
            Duration=self._between(30, 300),
            ItemCount=self._between(100, 5000),
        )

    def _resource_threshold_exceeded(self) -> SyntheticEvent:
        threshold = self._between(70, 90)
        return self._event(
            EventCategory.SYSTEM,
            Severity.WARNING,
            "Resource threshold exceeded: CPU usage {CpuUsage}% > {Threshold}% - Node: worker-{NodeId}",
            CpuUsage=self._between(threshold, 100),
            Threshold=threshold,
            NodeId=self._between(1, 5),
        )

    def _configuration_reloaded(self) -> SyntheticEvent:
        version = f"v{self._between(1, 3)}.{self._between(0, 10)}.{self._between(0, 20)}"
        return self._event(
            EventCategory.SYSTEM,
            Severity.INFO,
            "Configuration reloaded: Version {ConfigVersion} - Changes detected in {ConfigFile}",
            ConfigVersion=version,
            ConfigFile="appsettings.Production.json",
        )

    def _connection_pool_status(self) -> SyntheticEvent:
        active = self._between(5, 25)
        return self._event(
            EventCategory.SYSTEM,
            Severity.DEBUG,
            "Database connection pool status: {Database} - Active: {ActiveConnections} "
            "Available: {AvailableConnections}",
            Database=self.catalog.pick(self.catalog.databases),
            ActiveConnections=active,
            AvailableConnections=30 - active,
        )
