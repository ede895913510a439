"""Rate limiting configuration (avoids circular imports)."""

from slowapi import Limiter
from slowapi.util import get_remote_address

from skillgraph.config import get_settings

# Disabled in tests via SKILLGRAPH_NO_RATE_LIMIT=true
limiter = Limiter(key_func=get_remote_address, enabled=get_settings().rate_limit_enabled)
