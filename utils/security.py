"""
Security Module - Client identification, rate limiting and admin key checks
"""

import hmac
import time
import threading
from flask import request, current_app


# Rate Limiting
RATE_LIMIT_REQUESTS = {}  # {ip: [(timestamp, endpoint), ...]}
_rate_limit_lock = threading.Lock()


def get_client_ip():
    """Get the connection's client address

    Forwarded headers are only honoured through ProxyFix, which the app
    factory installs when TRUSTED_PROXY_COUNT is set.
    """
    return request.remote_addr


def get_user_agent():
    return request.headers.get('User-Agent')


def check_rate_limit(endpoint='contact'):
    """Check if the client IP is within rate limit, recording this request"""
    if not current_app.config.get('RATE_LIMIT_ENABLED', True):
        return True

    max_requests = current_app.config.get('RATE_LIMIT_MAX_REQUESTS', 10)
    window = current_app.config.get('RATE_LIMIT_WINDOW', 60)
    client_ip = get_client_ip() or 'unknown'
    current_time = time.time()

    with _rate_limit_lock:
        # Clean old requests outside the window, dropping idle IPs entirely
        for ip in list(RATE_LIMIT_REQUESTS):
            still_recent = [
                (ts, ep) for ts, ep in RATE_LIMIT_REQUESTS[ip]
                if current_time - ts < window
            ]
            if still_recent:
                RATE_LIMIT_REQUESTS[ip] = still_recent
            else:
                del RATE_LIMIT_REQUESTS[ip]

        recent = RATE_LIMIT_REQUESTS.get(client_ip, [])
        endpoint_requests = [ep for ts, ep in recent if ep == endpoint]
        if len(endpoint_requests) >= max_requests:
            RATE_LIMIT_REQUESTS[client_ip] = recent
            current_app.logger.warning(f"Rate limit exceeded for {client_ip} on {endpoint}")
            return False

        recent.append((current_time, endpoint))
        RATE_LIMIT_REQUESTS[client_ip] = recent
    return True


def reset_rate_limits():
    with _rate_limit_lock:
        RATE_LIMIT_REQUESTS.clear()


def verify_admin_key(provided_key):
    """Compare a caller-supplied key with the configured ADMIN_KEY"""
    expected = current_app.config.get('ADMIN_KEY')
    if not expected or not provided_key:
        return False
    return hmac.compare_digest(provided_key.encode('utf-8'), expected.encode('utf-8'))


__all__ = [
    'get_client_ip',
    'get_user_agent',
    'check_rate_limit',
    'reset_rate_limits',
    'verify_admin_key'
]
