"""Rate limiter instance for SlowAPI.

Shared so both main (app.state.limiter) and route modules (e.g. auth) can use
the same instance without circular imports. Central limit strings and decorators
keep rate limits in one place.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

limiter = Limiter(key_func=get_remote_address)

LOGIN_LIMIT = "10/minute"
CREATE_TENANT_LIMIT = "5/minute"

limit_auth = limiter.limit(LOGIN_LIMIT)
limit_create_tenant = limiter.limit(CREATE_TENANT_LIMIT)
