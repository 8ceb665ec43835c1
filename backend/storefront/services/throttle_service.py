import math
import time
from dataclasses import dataclass

from limits import RateLimitItemPerSecond
from limits.storage import storage_from_string
from limits.strategies import FixedWindowRateLimiter

from storefront.config import settings


@dataclass(frozen=True)
class ThrottleDecision:
    allowed: bool
    retry_after: int = 0


class LoginThrottle:
    """
    Fixed-window attempt counter per client key.

    Every call to ``check`` consumes one slot, whatever the login outcome
    turns out to be. The increment and the comparison against the limit are a
    single storage operation, so two concurrent requests cannot both see the
    last free slot. When the window elapses the counter starts again at zero.
    """

    namespace = "admin-login"

    def __init__(
        self,
        max_attempts: int = 5,
        window_seconds: int = 600,
        storage_uri: str = "memory://",
    ):
        self.item = RateLimitItemPerSecond(max_attempts, window_seconds)
        self.storage = storage_from_string(storage_uri)
        self.limiter = FixedWindowRateLimiter(self.storage)

    @property
    def max_attempts(self) -> int:
        return self.item.amount

    def check(self, client_key: str) -> ThrottleDecision:
        if self.limiter.hit(self.item, self.namespace, client_key):
            return ThrottleDecision(allowed=True)
        stats = self.limiter.get_window_stats(self.item, self.namespace, client_key)
        retry_after = max(1, math.ceil(stats.reset_time - time.time()))
        return ThrottleDecision(allowed=False, retry_after=retry_after)

    def clear(self, client_key: str):
        self.limiter.clear(self.item, self.namespace, client_key)

    def reset(self):
        self.storage.reset()


login_throttle = LoginThrottle(
    max_attempts=settings.LOGIN_MAX_ATTEMPTS,
    window_seconds=settings.LOGIN_WINDOW_SECONDS,
    storage_uri=settings.THROTTLE_STORAGE_URI,
)


def get_login_throttle() -> LoginThrottle:
    return login_throttle
