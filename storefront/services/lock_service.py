import threading
import uuid
from contextlib import contextmanager
from typing import Dict, Iterator

import redis
from tenacity import (
    RetryError,
    Retrying,
    retry,
    retry_if_exception_type,
    retry_if_result,
    stop_after_attempt,
    stop_after_delay,
    wait_exponential,
    wait_fixed,
)

from storefront.domain.errors import LockUnavailableError
from storefront.utils.settings import LOCK_TTL_SECONDS, LOCK_WAIT_SECONDS, REDIS_URL
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

#compare-and-delete in one script, nobody can slip in between GET and DEL
_RELEASE_LUA = """
if redis.call('GET', KEYS[1]) == ARGV[1] then
    return redis.call('DEL', KEYS[1])
else
    return 0
end
"""


def redis_retry():
    return retry(
        reraise=True,
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.2, min=0.2, max=2),
        retry=retry_if_exception_type(redis.RedisError),
    )


def cart_key(cart_id: str) -> str:
    return f"cart:{cart_id}"


def product_key(product_id: str) -> str:
    return f"product:{product_id}:lock"


class LockService:
    """
    Serializes mutations per record key (cart, product).
    -keys are taken in sorted order, so two callers never deadlock on each other
    -a thread already holding a key passes straight through (re-entrant)
    """

    def __init__(self):
        self._held = threading.local()

    def _held_keys(self) -> set:
        if not hasattr(self._held, "keys"):
            self._held.keys = set()
        return self._held.keys

    @contextmanager
    def lock(self, *keys: str) -> Iterator[None]:
        held = self._held_keys()
        acquired = []
        try:
            for key in sorted(set(keys)):
                if key in held:
                    continue
                self.acquire(key)
                held.add(key)
                acquired.append(key)
            yield
        finally:
            for key in reversed(acquired):
                held.discard(key)
                self.release(key)

    def acquire(self, key: str) -> None:
        raise NotImplementedError

    def release(self, key: str) -> None:
        raise NotImplementedError


class LocalLockService(LockService):
    """
    One threading.Lock per key, for a single-process deployment.
    A key's lock lives only while someone holds or waits on it.
    """

    def __init__(self, wait_seconds: float = LOCK_WAIT_SECONDS):
        super().__init__()
        self.wait_seconds = wait_seconds
        # key -> [lock, holders + waiters]
        self._locks: Dict[str, list] = {}
        self._guard = threading.Lock()

    def _checkout(self, key: str) -> threading.Lock:
        with self._guard:
            entry = self._locks.setdefault(key, [threading.Lock(), 0])
            entry[1] += 1
            return entry[0]

    def _checkin(self, key: str) -> None:
        with self._guard:
            entry = self._locks[key]
            entry[1] -= 1
            if entry[1] == 0:
                del self._locks[key]

    def acquire(self, key: str) -> None:
        if not self._checkout(key).acquire(timeout=self.wait_seconds):
            self._checkin(key)
            logger.warning(f"Lock {key} not acquired within {self.wait_seconds}s")
            raise LockUnavailableError(key)

    def release(self, key: str) -> None:
        with self._guard:
            lock = self._locks[key][0]
        lock.release()
        self._checkin(key)


class RedisLockService(LockService):
    """
    Lock shared by every worker process.
    -SET key token NX EX ttl (expires on its own if the holder dies)
    -release through lua, only the holder's token can delete the key
    """

    def __init__(
        self,
        url: str | None = None,
        client: redis.Redis | None = None,
        ttl: int = LOCK_TTL_SECONDS,
        wait_seconds: float = LOCK_WAIT_SECONDS,
        poll_interval: float = 0.05,
    ):
        super().__init__()
        self.redis = client or redis.Redis.from_url(
            url or REDIS_URL,
            decode_responses=True,
        )
        self.ttl = ttl
        self.wait_seconds = wait_seconds
        self.poll_interval = poll_interval
        self._tokens: Dict[str, str] = {}

    @redis_retry()
    def try_acquire(self, key: str, token: str) -> bool:
        #SET product:1:lock "<token>" NX EX 30
        return bool(self.redis.set(name=key, value=token, nx=True, ex=self.ttl))

    def acquire(self, key: str) -> None:
        token = uuid.uuid4().hex
        logger.info(f"Acquire lock {key}")
        try:
            for attempt in Retrying(
                stop=stop_after_delay(self.wait_seconds),
                wait=wait_fixed(self.poll_interval),
                retry=retry_if_result(lambda acquired: not acquired),
            ):
                with attempt:
                    acquired = self.try_acquire(key, token)
                if not attempt.retry_state.outcome.failed:
                    attempt.retry_state.set_result(acquired)
        except RetryError:
            logger.warning(f"Lock {key} still held after {self.wait_seconds}s")
            raise LockUnavailableError(key)
        self._tokens[key] = token

    @redis_retry()
    def release(self, key: str) -> None:
        token = self._tokens.pop(key, None)
        if token is None:
            return
        logger.info(f"Release lock {key}")
        released = self.redis.eval(_RELEASE_LUA, 1, key, token)
        if not released:
            logger.warning(f"Lock {key} expired before release")
