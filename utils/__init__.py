"""
Utils Package - Centralized utility modules initialization

utils.submissions is imported directly by callers: it depends on models,
which itself imports from this package.
"""

from .errors import (
    ContactAPIError,
    ValidationError,
    InvalidStatus,
    Unauthorized,
    NotFound,
    RateLimited,
    StoreFailure
)
from .validation import ContactStatus, normalize_email, validate_submission
from .pagination import parse_page_params, build_pagination
from .security import (
    get_client_ip,
    get_user_agent,
    check_rate_limit,
    reset_rate_limits,
    verify_admin_key
)
from .decorators import admin_key_required
from .responses import success_response, error_response

__all__ = [
    # Errors
    'ContactAPIError',
    'ValidationError',
    'InvalidStatus',
    'Unauthorized',
    'NotFound',
    'RateLimited',
    'StoreFailure',

    # Validation
    'ContactStatus',
    'normalize_email',
    'validate_submission',

    # Pagination
    'parse_page_params',
    'build_pagination',

    # Security
    'get_client_ip',
    'get_user_agent',
    'check_rate_limit',
    'reset_rate_limits',
    'verify_admin_key',

    # Decorators
    'admin_key_required',

    # Responses
    'success_response',
    'error_response'
]
