from __future__ import annotations
import asyncio
import logging
from enum import Enum
from typing import Awaitable, Callable, Optional

logger = logging.getLogger(__name__)


class InitState(str, Enum):
    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    READY = "ready"


class SingleFlight:
    """
    Memoized async initializer: Uninitialized -> Initializing -> Ready.

    The first caller of `ensure()` starts `init_fn`; callers arriving while it
    runs await the same task instead of starting another one. Once it succeeds
    every later call returns immediately. If it fails, the error reaches every
    waiter and the state falls back to Uninitialized so a later call retries.
    """

    def __init__(self, init_fn: Callable[[], Awaitable[None]], name: str = "init") -> None:
        self._init_fn = init_fn
        self._name = name
        self._state = InitState.UNINITIALIZED
        self._task: Optional[asyncio.Task] = None

    @property
    def state(self) -> InitState:
        return self._state

    async def ensure(self) -> None:
        if self._state is InitState.READY:
            return
        if self._task is None:
            self._state = InitState.INITIALIZING
            logger.info(f"{self._name}: initializing")
            self._task = asyncio.ensure_future(self._run())
        # shield: a cancelled waiter must not cancel the shared initialization
        await asyncio.shield(self._task)

    async def _run(self) -> None:
        try:
            await self._init_fn()
        except BaseException:
            self._state = InitState.UNINITIALIZED
            self._task = None
            logger.error(f"{self._name}: initialization failed, will retry on next call")
            raise
        self._state = InitState.READY
        logger.info(f"{self._name}: ready")
