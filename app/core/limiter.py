"""SlowAPI limiter shared by main (app.state.limiter) and the write routes.

Limits are read from settings on each check, so WRITE_RATE_LIMIT and
MESSAGE_SEND_RATE_LIMIT apply without touching the route decorators.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from app.core.config import get_settings

limiter = Limiter(key_func=get_remote_address)


def _write_limit() -> str:
    return get_settings().write_rate_limit


def _message_send_limit() -> str:
    return get_settings().message_send_rate_limit


limit_writes = limiter.limit(_write_limit)
limit_message_send = limiter.limit(_message_send_limit)
