"""Redis backend wrapping a redis-py client."""

import logging
from typing import Any

from redis.exceptions import RedisError

from cacheinfo.backends.base import CacheBackend
from cacheinfo.errors import BackendQueryError

logger = logging.getLogger(__name__)


class RedisBackend(CacheBackend):
    """Backend storing entries in Redis.

    Inspection goes through the INFO command only; keys are not enumerated.
    """

    def __init__(self, client: Any):
        """Initialize RedisBackend.

        Args:
            client: redis.Redis or redis.RedisCluster instance.
        """
        self.client = client

    @property
    def client_name(self) -> str:
        """Qualified name of the client class, e.g. 'redis.Redis'."""
        client_type = type(self.client)
        return f"{client_type.__module__.split('.')[0]}.{client_type.__name__}"

    def info(self) -> dict[str, Any]:
        """Run INFO and return the parsed sections as one flat dict.

        Raises:
            BackendQueryError: If the client fails to answer.
        """
        try:
            raw = self.client.info()
        except (RedisError, OSError) as e:
            logger.debug(f"redis INFO failed on {self.client_name}: {e!r}")
            raise BackendQueryError(f"redis INFO query failed: {e}") from e
        return dict(raw or {})

    def is_persistent(self) -> bool:
        return True
