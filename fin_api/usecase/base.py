import asyncio
import functools

from fin_api.errors import InternalServerError
from fin_api.logging_config import get_logger

logger = get_logger(__name__)


DEFAULT_CONTEXT_TIMEOUT = 5.0


def bounded(method):
    """
    Run a use-case coroutine inside the use-case's timeout budget.

    When the budget elapses the in-flight store call is cancelled and the
    caller sees a generic InternalServerError.
    """

    @functools.wraps(method)
    async def wrapper(self, *args, **kwargs):
        try:
            return await asyncio.wait_for(method(self, *args, **kwargs), timeout=self.context_timeout)
        except asyncio.TimeoutError as e:
            logger.error(f"{type(self).__name__}.{method.__name__} exceeded {self.context_timeout}s")
            raise InternalServerError("Request timed out") from e

    return wrapper


class Usecase:
    def __init__(self, context_timeout: float = DEFAULT_CONTEXT_TIMEOUT):
        if context_timeout <= 0:
            raise ValueError("context_timeout must be positive")
        self.context_timeout = context_timeout
