"""Reconnect loop for a single dependency, driven by the linear backoff policy"""
import asyncio
import logging
from enum import Enum
from typing import Awaitable, Callable, Optional

from .backoff import DEFAULT_POLICY, LinearBackoff

logger = logging.getLogger(__name__)


class ConnectionState(str, Enum):
    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"


class ReconnectSupervisor:
    """Owns the attempt counter and the wait between connection attempts"""

    def __init__(
        self,
        name: str,
        connect: Callable[[], Awaitable[object]],
        policy: Optional[LinearBackoff] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        """
        Args:
            name: Dependency name used in log messages
            connect: Coroutine function that raises when the dependency is unreachable
            policy: Backoff policy (default: 50ms steps up to 2s)
            sleep: Awaitable sleep; replaced in tests
        """
        self.name = name
        self._connect = connect
        self.policy = policy or DEFAULT_POLICY
        self._sleep = sleep
        self.state = ConnectionState.DISCONNECTED
        self.attempt = 0

    def next_delay_ms(self) -> int:
        return self.policy.delay_ms(self.attempt + 1)

    def mark_lost(self):
        """Transport failure on an established connection"""
        if self.state is ConnectionState.CONNECTED:
            logger.warning(f"{self.name}: connection lost")
        self.state = ConnectionState.DISCONNECTED
        self.attempt = 0

    async def run_until_connected(self):
        """
        Retry connect() until it succeeds

        There is no retry limit. Cancel the task to stop waiting; the state is
        left at DISCONNECTED in that case.
        """
        while True:
            self.state = ConnectionState.CONNECTING
            try:
                await self._connect()
            except asyncio.CancelledError:
                self.state = ConnectionState.DISCONNECTED
                raise
            except Exception as e:
                self.state = ConnectionState.DISCONNECTED
                self.attempt += 1
                delay_ms = self.policy.delay_ms(self.attempt)
                logger.warning(
                    f"{self.name}: connect attempt {self.attempt} failed ({e}); retrying in {delay_ms}ms"
                )
                await self._sleep(delay_ms / 1000)
                continue

            if self.attempt:
                logger.info(f"{self.name}: connected after {self.attempt} failed attempts")
            else:
                logger.info(f"{self.name}: connected")
            self.state = ConnectionState.CONNECTED
            self.attempt = 0
            return
