import os


class Config:
    """Base configuration"""

    # Database Settings
    _database_url = os.environ.get('DATABASE_URL')
    if not _database_url:
        # Assemble from individual PG* variables when DATABASE_URL is missing
        pg_user = os.environ.get('PGUSER')
        pg_pass = os.environ.get('PGPASSWORD')
        pg_host = os.environ.get('PGHOST')
        pg_port = os.environ.get('PGPORT')
        pg_db = os.environ.get('PGDATABASE')
        if all([pg_user, pg_pass, pg_host, pg_port, pg_db]):
            _database_url = f"postgresql://{pg_user}:{pg_pass}@{pg_host}:{pg_port}/{pg_db}"

    if _database_url and _database_url.startswith("postgres://"):
        _database_url = _database_url.replace("postgres://", "postgresql://", 1)

    SQLALCHEMY_DATABASE_URI = _database_url or 'sqlite:///contacts.db'
    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_recycle': 3600,
        'pool_pre_ping': True,
    }
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Request Settings
    MAX_CONTENT_LENGTH = 64 * 1024  # 64KB is plenty for a contact form

    # Admin Settings
    ADMIN_KEY = os.environ.get('ADMIN_KEY')

    # Number of reverse proxies in front of the app whose X-Forwarded-For
    # hops are trusted; 0 means the socket address is the client address
    TRUSTED_PROXY_COUNT = int(os.environ.get('TRUSTED_PROXY_COUNT', '0'))

    # Error detail (exception text) is echoed in envelopes only when enabled
    EXPOSE_ERROR_DETAILS = False

    # Pagination
    DEFAULT_PAGE_SIZE = 10
    MAX_PAGE_SIZE = 100

    # Contact form rate limiting
    RATE_LIMIT_ENABLED = True
    RATE_LIMIT_MAX_REQUESTS = int(os.environ.get('RATE_LIMIT_MAX_REQUESTS', '10'))
    RATE_LIMIT_WINDOW = int(os.environ.get('RATE_LIMIT_WINDOW', '60'))


class DevelopmentConfig(Config):
    """Development configuration"""
    ENV_NAME = 'development'
    DEBUG = True
    TESTING = False
    EXPOSE_ERROR_DETAILS = True


class ProductionConfig(Config):
    """Production configuration"""
    ENV_NAME = 'production'
    DEBUG = False
    TESTING = False


class TestingConfig(Config):
    """Testing configuration"""
    ENV_NAME = 'testing'
    DEBUG = False
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    # In-memory SQLite uses a StaticPool; pool options do not apply there.
    SQLALCHEMY_ENGINE_OPTIONS = {}
    ADMIN_KEY = 'test-admin-key'
    RATE_LIMIT_ENABLED = False


# Select configuration based on environment
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': ProductionConfig
}


def get_config(config_name=None):
    """Get configuration by name, falling back to FLASK_ENV"""
    env = config_name or os.environ.get('FLASK_ENV', 'production')
    return config.get(env, config['default'])
