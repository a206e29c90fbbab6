"""
============================================================================
Lisk DEX HTTP API v1.0.0
Bus Channel - Request/Response Invocation Contract
============================================================================

Reliability Level: L6 Critical
Input Constraints: Commands addressed as "<moduleAlias>:<actionName>"
Side Effects: Delegates to the registered module handlers

The gateway never talks to the exchange engine directly. Every read and
write is an invocation on the module bus:

    result = await channel.invoke(CommandId("lisk_dex", "getBids"), query)

A failed invocation always surfaces as BusInvocationError. When the failure
originated inside the target module, the module's own error is carried in
`source_error` (name + message) so the gateway can tell caller-caused
failures (InvalidQueryError) from everything else.

Python 3.8 Compatible - No union type hints (X | None)
============================================================================
"""

import asyncio
import inspect
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Optional, Tuple, Union

# Configure module logger
logger = logging.getLogger(__name__)


# ============================================================================
# CONSTANTS
# ============================================================================

# Name carried by engine errors caused by a malformed caller query
INVALID_QUERY_ERROR = "InvalidQueryError"

# Separator of the alias-qualified command string
COMMAND_SEPARATOR = ":"


# ============================================================================
# COMMAND IDENTIFIER
# ============================================================================

@dataclass(frozen=True)
class CommandId:
    """
    Opaque bus address of a module action or event.

    Reliability Level: L6 Critical
    Input Constraints: Non-empty alias and action without separator
    Side Effects: None
    """
    alias: str
    action: str

    def __post_init__(self) -> None:
        if not self.alias or not self.action:
            raise ValueError("CommandId requires both alias and action")
        if COMMAND_SEPARATOR in self.alias:
            raise ValueError(f"Module alias must not contain '{COMMAND_SEPARATOR}': {self.alias}")

    @classmethod
    def parse(cls, value: str) -> "CommandId":
        """Parse an "alias:action" string."""
        alias, sep, action = value.partition(COMMAND_SEPARATOR)
        if not sep:
            raise ValueError(f"Invalid command identifier: {value!r}")
        return cls(alias=alias, action=action)

    def __str__(self) -> str:
        return f"{self.alias}{COMMAND_SEPARATOR}{self.action}"


# ============================================================================
# ERRORS
# ============================================================================

@dataclass(frozen=True)
class SourceError:
    """Error reported by the target module of an invocation."""
    name: str
    message: str

    @property
    def is_invalid_query(self) -> bool:
        return self.name == INVALID_QUERY_ERROR


class BusInvocationError(Exception):
    """
    Raised by every channel when an invocation does not produce a result.

    Reliability Level: L6 Critical

    Attributes:
        message: Transport-level description of the failure
        command: The command that failed (None for publish failures)
        source_error: The target module's own error, if it reported one
    """

    def __init__(
        self,
        message: str,
        command: Optional[CommandId] = None,
        source_error: Optional[SourceError] = None
    ) -> None:
        self.message = message
        self.command = command
        self.source_error = source_error
        super().__init__(message)

    def __repr__(self) -> str:
        return (
            f"BusInvocationError(message={self.message!r}, "
            f"command={str(self.command) if self.command else None!r}, "
            f"source_error={self.source_error!r})"
        )


class InvalidQueryError(Exception):
    """
    Engine-side error for a query the engine refuses to execute.

    Raised by in-process module handlers; the channel turns it into the
    `source_error` of a BusInvocationError.
    """

    name = INVALID_QUERY_ERROR

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


# ============================================================================
# CHANNEL CONTRACT
# ============================================================================

class Channel(ABC):
    """
    Request/response bus used by the gateway.

    Reliability Level: L6 Critical
    Input Constraints: JSON-serialisable payloads
    Side Effects: Implementation defined (network I/O or in-process calls)
    """

    @abstractmethod
    async def invoke(self, command: CommandId, payload: Optional[Dict[str, Any]] = None) -> Any:
        """
        Invoke a module action and wait for its result.

        Raises:
            BusInvocationError: If the invocation fails for any reason
        """

    @abstractmethod
    def publish(self, command: CommandId, payload: Optional[Dict[str, Any]] = None) -> None:
        """Publish an event without waiting for delivery. Never raises."""

    async def close(self) -> None:
        """Release transport resources."""
        return None


# ============================================================================
# IN-PROCESS CHANNEL
# ============================================================================

Handler = Callable[[Dict[str, Any]], Union[Any, Awaitable[Any]]]
Subscriber = Callable[[CommandId, Dict[str, Any]], None]


class LocalChannel(Channel):
    """
    In-process bus: module actions are plain (sync or async) callables.

    Reliability Level: L6 Critical
    Input Constraints: Handlers registered before traffic starts
    Side Effects: Calls registered handlers

    USAGE:
        channel = LocalChannel()
        channel.register(CommandId("lisk_dex", "getBids"), engine.get_bids)
        bids = await channel.invoke(CommandId("lisk_dex", "getBids"), {"limit": 10})
    """

    def __init__(self) -> None:
        self._handlers: Dict[CommandId, Handler] = {}
        self._subscribers: List[Subscriber] = []
        self.published: List[Tuple[CommandId, Dict[str, Any]]] = []

    def register(self, command: CommandId, handler: Handler) -> None:
        """Register the handler of a module action."""
        if command in self._handlers:
            raise ValueError(f"Handler already registered for {command}")
        self._handlers[command] = handler
        logger.debug(f"[BUS-LOCAL] Registered handler | command={command}")

    def subscribe(self, subscriber: Subscriber) -> None:
        """Receive every published event."""
        self._subscribers.append(subscriber)

    async def invoke(self, command: CommandId, payload: Optional[Dict[str, Any]] = None) -> Any:
        handler = self._handlers.get(command)
        if handler is None:
            raise BusInvocationError(
                f"No handler registered for {command}",
                command=command
            )

        try:
            result = handler(payload if payload is not None else {})
            if inspect.isawaitable(result):
                result = await result
        except asyncio.CancelledError:
            raise
        except BusInvocationError:
            raise
        except InvalidQueryError as e:
            raise BusInvocationError(
                f"Action {command} rejected the query",
                command=command,
                source_error=SourceError(name=INVALID_QUERY_ERROR, message=e.message)
            ) from e
        except Exception as e:
            raise BusInvocationError(
                f"Action {command} failed",
                command=command,
                source_error=SourceError(name=type(e).__name__, message=str(e))
            ) from e

        return result

    def publish(self, command: CommandId, payload: Optional[Dict[str, Any]] = None) -> None:
        data = payload if payload is not None else {}
        self.published.append((command, data))

        for subscriber in self._subscribers:
            try:
                subscriber(command, data)
            except Exception as e:
                logger.warning(
                    f"[BUS-LOCAL] Subscriber failed on event | "
                    f"event={command} | error={e}"
                )


# ============================================================================
# Module Exports
# ============================================================================

__all__ = [
    "INVALID_QUERY_ERROR",
    "COMMAND_SEPARATOR",
    "CommandId",
    "SourceError",
    "BusInvocationError",
    "InvalidQueryError",
    "Channel",
    "LocalChannel",
]
