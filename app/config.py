import os


class BaseConfig:
    """Base configuration shared across all environments."""

    # Flask core
    SECRET_KEY = os.environ.get('SECRET_KEY', 'fallback-secret-key-change-me')
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    WTF_CSRF_ENABLED = True

    # Database
    SQLALCHEMY_DATABASE_URI = os.environ.get(
        'SQLALCHEMY_DATABASE_URI', 'sqlite:///dev.db'
    )

    # Codeforces API
    CODEFORCES_API_BASE = os.environ.get(
        'CODEFORCES_API_BASE', 'https://codeforces.com/api'
    )
    CODEFORCES_RATE_LIMIT = float(os.environ.get('CODEFORCES_RATE_LIMIT', '2.0'))
    CODEFORCES_TIMEOUT = float(os.environ.get('CODEFORCES_TIMEOUT', '30'))
    SUBMISSION_FETCH_COUNT = int(os.environ.get('SUBMISSION_FETCH_COUNT', '1000'))

    # Recommendations
    RECOMMENDATION_LIMIT = int(os.environ.get('RECOMMENDATION_LIMIT', '10'))
    FALLBACK_LIMIT = int(os.environ.get('FALLBACK_LIMIT', '3'))
    SEED_SAMPLE_PROBLEMS = os.environ.get(
        'SEED_SAMPLE_PROBLEMS', 'true'
    ).lower() in ('true', '1', 'yes')

    # Scheduler
    SCHEDULER_ENABLED = os.environ.get(
        'SCHEDULER_ENABLED', 'false'
    ).lower() in ('true', '1', 'yes')
    REFRESH_INTERVAL_HOURS = int(os.environ.get('REFRESH_INTERVAL_HOURS', '6'))

    # Logging
    LOG_FILE_MAX_BYTES = int(os.environ.get('LOG_FILE_MAX_BYTES', '0'))
    LOG_FILE_BACKUP_COUNT = int(os.environ.get('LOG_FILE_BACKUP_COUNT', '3'))
    LOG_FORMAT = os.environ.get(
        'LOG_FORMAT', '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
    )


class DevelopmentConfig(BaseConfig):
    """Development environment configuration."""

    DEBUG = True
    SQLALCHEMY_DATABASE_URI = os.environ.get(
        'SQLALCHEMY_DATABASE_URI', 'sqlite:///dev.db'
    )
    SCHEDULER_ENABLED = False


class ProductionConfig(BaseConfig):
    """Production environment configuration."""

    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.environ.get(
        'SQLALCHEMY_DATABASE_URI', 'sqlite:///prod.db'
    )
    SCHEDULER_ENABLED = os.environ.get(
        'SCHEDULER_ENABLED', 'true'
    ).lower() in ('true', '1', 'yes')
    LOG_FILE_MAX_BYTES = int(os.environ.get('LOG_FILE_MAX_BYTES', str(5 * 1024 * 1024)))


class TestingConfig(BaseConfig):
    """Testing environment configuration."""

    TESTING = True
    DEBUG = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    WTF_CSRF_ENABLED = False
    SECRET_KEY = 'test-secret-key'
    SCHEDULER_ENABLED = False
    SEED_SAMPLE_PROBLEMS = False
    CODEFORCES_RATE_LIMIT = 0.0
    LOG_FILE_MAX_BYTES = 0
    SERVER_NAME = 'localhost'


config_map = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
}
