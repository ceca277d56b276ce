from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

from hms.core.config import get_limiter_storage_uri

# Global Limiter instance to be imported by controllers.
# create_app() binds it and disables it when RATE_LIMIT_ENABLED=0.
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=["1000 per hour", "200 per minute"],
    storage_uri=get_limiter_storage_uri(),
    enabled=True,
)
