import os

basedir = os.path.abspath(os.path.dirname(__file__))


def _env_bool(name, default=False):
    raw = os.environ.get(name)
    if raw is None:
        return default
    return str(raw).strip().lower() in {'1', 'true', 'yes', 'on'}


def _env_int(name, default):
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except (TypeError, ValueError):
        return default


def _normalize_database_url(raw_url):
    if not raw_url:
        return raw_url
    if raw_url.startswith('postgres://'):
        return raw_url.replace('postgres://', 'postgresql://', 1)
    return raw_url


class BaseConfig:
    SECRET_KEY = os.environ.get('SECRET_KEY', 'dev-secret-key-change-in-prod')
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    CORS_ALLOWED_ORIGINS = os.environ.get('CORS_ALLOWED_ORIGINS', '*')
    SOCKETIO_ASYNC_MODE = os.environ.get('SOCKETIO_ASYNC_MODE', 'threading')
    # Empty UPLOAD_FOLDER means uploads come back as inline data URLs.
    UPLOAD_FOLDER = os.environ.get('UPLOAD_FOLDER', '')
    PUBLIC_UPLOAD_BASE_URL = os.environ.get('PUBLIC_UPLOAD_BASE_URL', '')
    UPLOAD_MAX_BYTES = _env_int('UPLOAD_MAX_BYTES', 5 * 1024 * 1024)
    MAX_EQUIPMENT_SETS = _env_int('MAX_EQUIPMENT_SETS', 7)
    ALLIANCE_MEMBER_CAP = _env_int('ALLIANCE_MEMBER_CAP', 200)
    EMIT_REALTIME_UPDATES = _env_bool('EMIT_REALTIME_UPDATES', True)


class DevelopmentConfig(BaseConfig):
    DEBUG = True
    SQLALCHEMY_DATABASE_URI = _normalize_database_url(
        os.environ.get(
            'DATABASE_URL',
            'sqlite:///' + os.path.join(basedir, '..', 'alliance_dev.db')
        )
    )


class TestingConfig(BaseConfig):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    UPLOAD_FOLDER = ''
    PUBLIC_UPLOAD_BASE_URL = ''
    EMIT_REALTIME_UPDATES = False


class ProductionConfig(BaseConfig):
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = _normalize_database_url(os.environ.get('DATABASE_URL'))


config = {
    'development': DevelopmentConfig,
    'testing': TestingConfig,
    'production': ProductionConfig,
}
