"""
Log Generator Service Client

Client library for triggering on-demand logs and reading generator status
"""

import logging
from typing import Any, Dict, Optional

import httpx

logger = logging.getLogger(__name__)


class LogGeneratorServiceClient:
    """Log Generator Service HTTP client"""

    def __init__(
        self,
        base_url: str = "http://localhost:8080",
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize Log Generator Service client

        Args:
            base_url: Base URL of the service
            timeout: Request timeout in seconds
            transport: Custom httpx transport (e.g. ASGITransport in tests)
        """
        self.base_url = base_url.rstrip('/')
        self.client = httpx.AsyncClient(base_url=self.base_url, timeout=timeout, transport=transport)

    async def close(self):
        """Close HTTP client"""
        await self.client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    # =============================================================================
    # On-demand logging
    # =============================================================================

    async def _post_message(self, level: str, message: str) -> Optional[Dict[str, Any]]:
        try:
            response = await self.client.post(
                f"/api/v1/logs/{level}",
                json={"message": message}
            )
            response.raise_for_status()
            return response.json()

        except httpx.HTTPStatusError as e:
            logger.error(f"Failed to log {level} message: {e.response.status_code}")
            return None
        except Exception as e:
            logger.error(f"Error logging {level} message: {e}")
            return None

    async def log_info(self, message: str) -> Optional[Dict[str, Any]]:
        """
        Log a message at Info level

        Args:
            message: Message text

        Returns:
            {"level", "message", "timestamp"} or None on failure

        Example:
            >>> async with LogGeneratorServiceClient() as client:
            ...     entry = await client.log_info("Cache warmed")
        """
        return await self._post_message("info", message)

    async def log_warning(self, message: str) -> Optional[Dict[str, Any]]:
        """Log a message at Warning level"""
        return await self._post_message("warning", message)

    async def log_error(self, message: str) -> Optional[Dict[str, Any]]:
        """Log a message at Error level (with a simulated exception)"""
        return await self._post_message("error", message)

    async def log_critical(self, message: str) -> Optional[Dict[str, Any]]:
        """Log a message at Critical level (with a simulated exception)"""
        return await self._post_message("critical", message)

    async def generate_logs(self, count: int = 10) -> Optional[Dict[str, Any]]:
        """
        Emit a burst of random log records

        Args:
            count: Number of records (1-1000)

        Returns:
            {"generated", "timestamp"} or None on failure
        """
        try:
            response = await self.client.get(f"/api/v1/logs/generate/{count}")
            response.raise_for_status()
            return response.json()

        except httpx.HTTPStatusError as e:
            logger.error(f"Failed to generate logs: {e.response.status_code}")
            return None
        except Exception as e:
            logger.error(f"Error generating logs: {e}")
            return None

    # =============================================================================
    # Status
    # =============================================================================

    async def get_generator_status(self) -> Optional[Dict[str, Any]]:
        """Get state and counters of the continuous generator"""
        try:
            response = await self.client.get("/api/v1/logs/generator/status")
            response.raise_for_status()
            return response.json()

        except httpx.HTTPStatusError as e:
            logger.error(f"Failed to get generator status: {e.response.status_code}")
            return None
        except Exception as e:
            logger.error(f"Error getting generator status: {e}")
            return None

    async def health_check(self) -> bool:
        """Check service health"""
        try:
            response = await self.client.get("/health")
            return response.status_code == 200
        except Exception:
            return False
