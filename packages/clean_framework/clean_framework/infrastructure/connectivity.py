"""Connectivity checker implementations."""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx

from clean_framework.domain.enums import ConnectivityStatus
from clean_framework.domain.interfaces import Connectivity, ConnectivityListener
from clean_framework.infrastructure.logging import get_logger

if TYPE_CHECKING:
    from clean_framework.config import ConnectivityConfig

logger = get_logger(__name__)


class _ListenerRegistry(Connectivity):
    """Keeps change listeners and notifies them when the status moves."""

    def __init__(self) -> None:
        self._listeners: list[ConnectivityListener] = []
        self._last_status: ConnectivityStatus | None = None

    def register_connectivity_change_listener(self, listener: ConnectivityListener) -> None:
        self._listeners.append(listener)

    def _update_status(self, status: ConnectivityStatus) -> None:
        previous = self._last_status
        self._last_status = status
        if previous is None or previous is status:
            return
        logger.info(
            "Connectivity changed",
            extra={"old_status": previous.value, "new_status": status.value},
        )
        for listener in list(self._listeners):
            listener(status)


class AlwaysOnlineConnectivity(_ListenerRegistry):
    """Reports online unconditionally. The default for JSON services."""

    async def get_connectivity_status(self) -> ConnectivityStatus:
        return ConnectivityStatus.ONLINE


class StaticConnectivity(_ListenerRegistry):
    """Reports a status set by the application, e.g. from an OS callback."""

    def __init__(self, status: ConnectivityStatus = ConnectivityStatus.ONLINE) -> None:
        super().__init__()
        self._last_status = status

    @property
    def status(self) -> ConnectivityStatus:
        """The current status."""
        return self._last_status or ConnectivityStatus.ONLINE

    def set_status(self, status: ConnectivityStatus) -> None:
        """Change the status, notifying listeners if it differs."""
        self._update_status(status)

    async def get_connectivity_status(self) -> ConnectivityStatus:
        return self.status


class HttpProbeConnectivity(_ListenerRegistry):
    """Detects connectivity by sending a HEAD request to a probe URL.

    Any HTTP response counts as online; a transport failure or timeout counts
    as offline.
    """

    def __init__(
        self,
        probe_url: str,
        timeout: float = 3.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the checker.

        Args:
            probe_url: URL to probe
            timeout: Probe timeout in seconds
            client: HTTP client to use; a short-lived one is created per probe
                when omitted
        """
        super().__init__()
        self._probe_url = probe_url
        self._timeout = timeout
        self._client = client

    @classmethod
    def from_config(cls, config: ConnectivityConfig) -> HttpProbeConnectivity:
        """Build a checker from the connectivity configuration section."""
        return cls(probe_url=config.probe_url, timeout=config.probe_timeout)

    async def get_connectivity_status(self) -> ConnectivityStatus:
        try:
            if self._client is not None:
                await self._client.head(self._probe_url, timeout=self._timeout)
            else:
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    await client.head(self._probe_url)
        except httpx.TransportError as e:
            logger.debug(
                "Connectivity probe failed",
                extra={"probe_url": self._probe_url, "error": str(e)},
            )
            status = ConnectivityStatus.OFFLINE
        else:
            status = ConnectivityStatus.ONLINE

        self._update_status(status)
        return status
