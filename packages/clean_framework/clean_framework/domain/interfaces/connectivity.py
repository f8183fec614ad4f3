"""Abstract interface for network reachability checks."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable

from clean_framework.domain.enums import ConnectivityStatus

ConnectivityListener = Callable[[ConnectivityStatus], None]


class Connectivity(ABC):
    """Reports whether the device can currently reach the network.

    JSON services query this before doing any other work, so an offline
    status always wins over request validation.
    """

    @abstractmethod
    async def get_connectivity_status(self) -> ConnectivityStatus:
        """Return the current connectivity status."""
        pass

    @abstractmethod
    def register_connectivity_change_listener(self, listener: ConnectivityListener) -> None:
        """Register a callback fired whenever the status changes.

        Args:
            listener: Callable receiving the new status.
        """
        pass
