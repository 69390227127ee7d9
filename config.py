# Hospitality Desk Configuration

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path

BASE_DIR = Path(__file__).parent.absolute()


def _env_flag(name, default):
    return os.environ.get(name, default).lower() in ['true', 'on', '1']


class Config:
    """Settings shared by every desk deployment"""

    SECRET_KEY = os.environ.get('SECRET_KEY') or 'hospitality-desk-secret-key-2026'

    # Record store
    SEED_DEMO_DATA = _env_flag('SEED_DEMO_DATA', 'true')

    # Roster exports
    REPORTS_FOLDER = Path(os.environ.get('REPORTS_FOLDER') or BASE_DIR / 'reports')
    REPORTS_DEFAULT_FORMAT = os.environ.get('REPORTS_DEFAULT_FORMAT') or 'csv'

    # Profile and badge QR rendering
    QR_CODE_SIZE = int(os.environ.get('QR_CODE_SIZE', 10))
    QR_CODE_BORDER = int(os.environ.get('QR_CODE_BORDER', 4))

    # Kiosk timings (seconds) and haptic pulses (milliseconds)
    SCAN_COOLDOWN_SECONDS = 3.0
    STEP_ADVANCE_DELAY_SECONDS = 1.5
    RESULT_OVERLAY_SECONDS = 2.0
    HAPTIC_SUCCESS_MS = 200
    HAPTIC_ERROR_MS = 500

    LOG_LEVEL = os.environ.get('LOG_LEVEL') or 'INFO'
    LOG_FORMAT = '%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'
    LOG_FILE = BASE_DIR / 'logs' / 'hospitality.log'
    LOG_MAX_BYTES = 10 * 1024 * 1024  # 10MB
    LOG_BACKUP_COUNT = 5

    DEBUG = _env_flag('DEBUG', 'false')
    TESTING = False

    @classmethod
    def init_app(cls, app):
        """Apply settings Flask reads directly"""
        app.config.update({
            'SECRET_KEY': cls.SECRET_KEY,
            'REPORTS_DEFAULT_FORMAT': cls.REPORTS_DEFAULT_FORMAT,
        })
        logging.getLogger().setLevel(cls.LOG_LEVEL)


class DevelopmentConfig(Config):
    """Local desk laptop"""
    DEBUG = True
    LOG_LEVEL = 'DEBUG'


class TestingConfig(Config):
    """Route tests run against the demo profiles and hostels"""
    TESTING = True
    DEBUG = True
    SEED_DEMO_DATA = True


class ProductionConfig(Config):
    """Event deployment"""
    DEBUG = False
    SEED_DEMO_DATA = _env_flag('SEED_DEMO_DATA', 'false')
    LOG_LEVEL = 'WARNING'

    @classmethod
    def init_app(cls, app):
        super().init_app(app)

        # Keep a rotating copy of the desk log next to the app
        if not app.debug:
            cls.LOG_FILE.parent.mkdir(parents=True, exist_ok=True)
            handler = RotatingFileHandler(
                cls.LOG_FILE,
                maxBytes=cls.LOG_MAX_BYTES,
                backupCount=cls.LOG_BACKUP_COUNT
            )
            handler.setFormatter(logging.Formatter(cls.LOG_FORMAT))
            handler.setLevel(logging.INFO)
            app.logger.addHandler(handler)
            app.logger.info('Hospitality Desk startup')


config = {
    'development': DevelopmentConfig,
    'testing': TestingConfig,
    'production': ProductionConfig,
    'default': DevelopmentConfig
}


def get_config(config_name=None):
    """Configuration class by name, falling back to FLASK_ENV"""
    name = config_name or os.environ.get('FLASK_ENV', 'default')
    return config.get(name, DevelopmentConfig)


def validate_config(config_class):
    """Return a list of problems with the kiosk and export settings"""
    errors = []

    for name in ('SCAN_COOLDOWN_SECONDS', 'STEP_ADVANCE_DELAY_SECONDS', 'RESULT_OVERLAY_SECONDS'):
        if getattr(config_class, name) <= 0:
            errors.append(f"{name} must be positive")

    for name in ('HAPTIC_SUCCESS_MS', 'HAPTIC_ERROR_MS'):
        if getattr(config_class, name) < 0:
            errors.append(f"{name} must not be negative")

    if config_class.REPORTS_DEFAULT_FORMAT not in ('csv', 'excel'):
        errors.append(f"Unsupported REPORTS_DEFAULT_FORMAT: {config_class.REPORTS_DEFAULT_FORMAT}")

    return errors


def init_config(app, config_name=None):
    """Validate the selected configuration and apply it to ``app``"""
    config_class = get_config(config_name)

    errors = validate_config(config_class)
    if errors:
        for error in errors:
            app.logger.error(f"Configuration error: {error}")
        raise RuntimeError("Configuration validation failed")

    config_class.init_app(app)
    return config_class
