import os
from dotenv import load_dotenv

load_dotenv(override=True)


def _env_bool(name, default):
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


def _env_int(name):
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {value!r}") from None


class Config:
    """
    Base configuration for Newsdesk.
    Every key can be overridden per app through app.config or the
    config dict handed to Newsdesk(app, config).
    """
    # Token signing and the single admin identity
    JWT_SECRET = os.getenv('JWT_SECRET', 'dev_secret_change_me')
    ADMIN_USER = os.getenv('ADMIN_USER', 'admin')
    ADMIN_PASSWORD = os.getenv('ADMIN_PASSWORD', 'password')

    # Mount point for every route, e.g. "/api" on serverless hosts
    API_PREFIX = os.getenv('API_PREFIX', '')

    # Durable news document
    DATA_PATH = os.getenv('DATA_PATH', os.path.join(os.getcwd(), 'data.json'))
    NEWS_WRITE_ASYNC = _env_bool('NEWS_WRITE_ASYNC', True)
    # None = bounded only by process memory; otherwise at least 1
    NEWS_CACHE_MAX_ITEMS = _env_int('NEWS_CACHE_MAX_ITEMS')

    # Structured log storage (sqlite). Empty = console only
    LOG_DB = os.getenv('LOG_DB', '')

    # Blob storage for uploads: "local" or "s3"
    STORAGE_BACKEND = os.getenv('STORAGE_BACKEND', 'local')
    UPLOAD_SUBFOLDER = os.getenv('UPLOAD_SUBFOLDER', 'uploads')
    S3_BUCKET = os.getenv('S3_BUCKET')
    S3_REGION = os.getenv('S3_REGION', 'us-east-1')
    S3_ENDPOINT_URL = os.getenv('S3_ENDPOINT_URL')
    S3_ACCESS_KEY = os.getenv('S3_ACCESS_KEY')
    S3_SECRET_KEY = os.getenv('S3_SECRET_KEY')
    S3_PUBLIC_BASE_URL = os.getenv('S3_PUBLIC_BASE_URL')

    # Port for local server
    port = int(os.getenv('PORT', '5000'))

    KEYS = (
        'JWT_SECRET', 'ADMIN_USER', 'ADMIN_PASSWORD', 'API_PREFIX',
        'DATA_PATH', 'NEWS_WRITE_ASYNC', 'NEWS_CACHE_MAX_ITEMS', 'LOG_DB',
        'STORAGE_BACKEND', 'UPLOAD_SUBFOLDER', 'S3_BUCKET', 'S3_REGION',
        'S3_ENDPOINT_URL', 'S3_ACCESS_KEY', 'S3_SECRET_KEY', 'S3_PUBLIC_BASE_URL',
    )

    DEFAULT_JWT_SECRET = 'dev_secret_change_me'
