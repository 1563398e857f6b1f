"""
Manager Contract - Capability interface for registered resource handles

A manager must provide get_connection() and close_connection().
get_model(), is_connected() and health_check() are optional extensions;
the registry probes for them at call time and treats missing ones as absent.
"""

import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Awaitable, Dict, Optional, Union


def now_ms() -> int:
    """Current Unix time in milliseconds"""
    return int(time.time() * 1000)


@dataclass
class HealthCheckResult:
    """
    Outcome of a single manager health check.

    Attributes:
        healthy: Whether the resource answered correctly
        message: Human-readable status message
        details: Additional diagnostic information
        latency: Response time in milliseconds
        timestamp: Unix time in milliseconds when the check ran
    """
    healthy: bool
    message: Optional[str] = None
    details: Optional[Dict[str, Any]] = None
    latency: Optional[float] = None
    timestamp: int = field(default_factory=now_ms)

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {'healthy': self.healthy, 'timestamp': self.timestamp}
        if self.message is not None:
            result['message'] = self.message
        if self.details is not None:
            result['details'] = self.details
        if self.latency is not None:
            result['latency'] = self.latency
        return result


class Manager(ABC):
    """
    Required capabilities of every manager.

    Subclasses may set `type` to the tag the manager factory registers them
    under; when it is None the class name is used.
    """

    type: Optional[str] = None

    @abstractmethod
    def get_connection(self) -> Any:
        """Return the underlying connection or client (pool, driver handle, ...)"""

    @abstractmethod
    def close_connection(self) -> Union[Any, Awaitable[Any]]:
        """Close the connection; may return an awaitable"""


class ModelProvider(ABC):
    """Optional capability: named model lookup"""

    @abstractmethod
    def get_model(self, name: str) -> Any:
        ...


class ConnectionStatus(ABC):
    """Optional capability: synchronous connectivity check"""

    @abstractmethod
    def is_connected(self) -> bool:
        ...


class HealthCheckable(ABC):
    """Optional capability: structured health check, may be awaitable"""

    @abstractmethod
    def health_check(self) -> Union[HealthCheckResult, Awaitable[HealthCheckResult]]:
        ...


def get_capability(manager: Any, capability: str):
    """
    Return the bound method `capability` of manager, or None when the
    manager does not provide it.
    """
    method = getattr(manager, capability, None)
    return method if callable(method) else None
