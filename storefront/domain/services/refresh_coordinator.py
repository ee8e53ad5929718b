"""Single-flight coordination of access token refreshes.

When several requests fail with 401 at about the same time, only the first
one performs the refresh. Every other request registers as a waiter and is
resumed with the outcome of that same refresh: the new access token on
success, the refresh error on failure.
"""

import asyncio
from typing import Awaitable, Callable, List

import structlog

from storefront.core.exceptions import TokenRefreshError

logger = structlog.get_logger(__name__)

RefreshFn = Callable[[], Awaitable[str]]


class RefreshCoordinator:
    """Ensures at most one refresh call is in flight for a client.

    State:
        in_progress: True while a refresh is running.
        waiters: Futures of the requests suspended behind the running refresh,
            in arrival order.

    The check of ``in_progress`` and its update happen without an intervening
    ``await``, so on a single event loop no other task can observe a stale
    value. When a refresh settles, the waiter list is swapped for an empty one
    and ``in_progress`` is reset before any waiter is resumed; waiters are then
    resolved or rejected in FIFO order, exactly once.
    """

    def __init__(self):
        self._in_progress = False
        self._waiters: List[asyncio.Future] = []
        self.refresh_count = 0

    @property
    def in_progress(self) -> bool:
        return self._in_progress

    @property
    def waiter_count(self) -> int:
        return len(self._waiters)

    async def run_exclusive(self, refresh_fn: RefreshFn) -> str:
        """Run ``refresh_fn`` unless a refresh is already running, then share its result.

        Args:
            refresh_fn: Coroutine function performing the refresh and returning
                the new access token.

        Returns:
            str: The access token produced by the refresh this call took part in.

        Raises:
            Exception: Whatever the refresh raised; every waiter of that cycle
                receives the same error.
            TokenRefreshError: For waiters, when the refreshing task was cancelled.
        """
        if self._in_progress:
            waiter = asyncio.get_running_loop().create_future()
            self._waiters.append(waiter)
            logger.debug("token_refresh_waiter_queued", position=len(self._waiters))
            return await waiter

        self._in_progress = True
        self.refresh_count += 1
        try:
            token = await refresh_fn()
        except asyncio.CancelledError:
            self._settle(error=TokenRefreshError("Token refresh was cancelled", code="token_refresh_cancelled"))
            raise
        except Exception as exc:
            self._settle(error=exc)
            raise
        self._settle(token=token)
        return token

    def _settle(self, token: str = None, error: BaseException = None) -> None:
        waiters, self._waiters = self._waiters, []
        self._in_progress = False
        if waiters:
            logger.debug(
                "token_refresh_waiters_released",
                count=len(waiters),
                succeeded=error is None,
            )
        for waiter in waiters:
            if waiter.done():
                # Cancelled while waiting.
                continue
            if error is not None:
                waiter.set_exception(error)
            else:
                waiter.set_result(token)
