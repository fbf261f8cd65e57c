"""
Rate limiter configuration.
"""
from slowapi import Limiter
from slowapi.util import get_remote_address

from fitplan.core.config import settings

# Rate limiter keyed by client IP; RATE_LIMIT_ENABLED=false turns it off
limiter = Limiter(key_func=get_remote_address, enabled=settings.RATE_LIMIT_ENABLED)
