import os
from dotenv import load_dotenv

load_dotenv()

# Project base directory
basedir = os.path.abspath(os.path.dirname(__file__))


def _engine_options(database_url, timeout):
    """Connection options per backend; the timeout bounds every connect attempt."""
    if database_url.startswith('sqlite'):
        return {'connect_args': {'timeout': timeout}}
    return {
        'pool_pre_ping': True,
        'pool_recycle': 3600,
        'connect_args': {'connect_timeout': timeout},
    }


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-key-change-in-production'

    # Database - absolute path for the default SQLite file
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or \
        'sqlite:///' + os.path.join(basedir, 'instance', 'shieldify.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    DB_TIMEOUT = int(os.environ.get('DB_TIMEOUT', '10'))
    SQLALCHEMY_ENGINE_OPTIONS = _engine_options(SQLALCHEMY_DATABASE_URI, DB_TIMEOUT)

    # Logging
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    LOG_DIR = os.path.join(basedir, 'logs')

    # CORS (export API only)
    CORS_ORIGINS = os.environ.get('CORS_ORIGINS', '*')

    # Reports
    ADMIN_PAGE_SIZE = 20
    CUSTOMER_PAGE_SIZE = 10
    EXPORT_LIMIT = 2000  # safety ceiling, not pagination
