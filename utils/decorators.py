"""
Decorators Module - Authorization decorators
"""

from functools import wraps
from flask import request, current_app
from .errors import Unauthorized
from .security import verify_admin_key, get_client_ip

ADMIN_KEY_HEADER = 'X-Admin-Key'


def admin_key_required(f):
    """Decorator to require the shared admin key before the view runs"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not verify_admin_key(request.headers.get(ADMIN_KEY_HEADER)):
            current_app.logger.warning(
                f"Rejected admin request to {request.path} from {get_client_ip()}")
            raise Unauthorized()
        return f(*args, **kwargs)
    return decorated_function
