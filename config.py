"""
Configuration module for Flask application.
Loads environment variables and defines app settings.
"""

import os
from dotenv import load_dotenv

from backend.utils.errors import ConfigurationError

# Load environment variables from .env file
load_dotenv()


class Config:
    """Application configuration class."""

    # Flask Configuration
    SECRET_KEY = os.getenv('SECRET_KEY')
    TESTING = False

    # MongoDB Configuration
    MONGODB_URI = os.getenv('MONGODB_URI')
    MONGODB_DBNAME = os.getenv('MONGODB_DBNAME', 'MentorConnect')
    MONGODB_CONNECT_ON_START = True

    # Gemini API Configuration
    GEMINI_API_KEY = os.getenv('GEMINI_API_KEY')
    GEMINI_MODEL = os.getenv('GEMINI_MODEL', 'gemini-2.5-flash-lite')
    LLM_TEMPERATURE = float(os.getenv('LLM_TEMPERATURE', '0.7'))

    # Image uploads (stored locally, served from /uploads/<filename>)
    UPLOAD_FOLDER = os.getenv(
        'UPLOAD_FOLDER',
        os.path.join(os.path.dirname(os.path.abspath(__file__)), 'uploads')
    )
    PUBLIC_BASE_URL = os.getenv('PUBLIC_BASE_URL')

    # Session Configuration
    SESSION_TYPE = "mongodb"
    SESSION_PERMANENT = True
    SESSION_MONGODB_DB = os.getenv('SESSION_MONGODB_DB', 'MentorConnectSessions')
    SESSION_MONGODB_COLLECT = "sessions"

    # Cookie settings
    # - Frontend and backend on different domains need:
    #     SESSION_COOKIE_SAMESITE=None
    #     SESSION_COOKIE_SECURE=True
    IS_PRODUCTION = os.getenv('FLASK_ENV') == 'production'

    _cookie_samesite_override = os.getenv('SESSION_COOKIE_SAMESITE')
    _cookie_secure_override = os.getenv('SESSION_COOKIE_SECURE')

    if _cookie_samesite_override is not None:
        SESSION_COOKIE_SAMESITE = _cookie_samesite_override
    else:
        SESSION_COOKIE_SAMESITE = "None" if IS_PRODUCTION else "Lax"

    if _cookie_secure_override is not None:
        SESSION_COOKIE_SECURE = _cookie_secure_override.lower() == 'true'
    else:
        SESSION_COOKIE_SECURE = True if IS_PRODUCTION else False

    SESSION_COOKIE_HTTPONLY = True
    PERMANENT_SESSION_LIFETIME = 86400 * 7  # 7 days in seconds

    # CORS Configuration
    ALLOWED_ORIGINS = os.getenv('ALLOWED_ORIGINS', 'http://localhost:3000,http://127.0.0.1:3000').split(',')

    # Server Configuration
    PORT = int(os.getenv('PORT', '5000'))
    DEBUG = os.getenv('DEBUG', 'False').lower() == 'true'

    # Logging configuration
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    REQUIRED_SETTINGS = (
        "SECRET_KEY",
        "MONGODB_URI",
        "GEMINI_API_KEY",
        "PUBLIC_BASE_URL",
    )

    @classmethod
    def validate(cls):
        """
        Check that every required setting is present.

        Raises:
            ConfigurationError: listing every missing environment variable
        """
        missing = [name for name in cls.REQUIRED_SETTINGS if not getattr(cls, name, None)]
        if missing:
            raise ConfigurationError(
                "Missing required environment variable(s): "
                f"{', '.join(missing)}. Set them in your environment or .env file."
            )


class TestConfig(Config):
    """Configuration used by the test suite (in-memory MongoDB, cookie sessions)."""

    TESTING = True
    SECRET_KEY = "test-secret-key"
    MONGODB_URI = "mongodb://localhost"
    MONGODB_DBNAME = "MentorConnectTest"
    # The test suite connects MongoEngine to mongomock itself
    MONGODB_CONNECT_ON_START = False
    GEMINI_API_KEY = "test-gemini-key"
    PUBLIC_BASE_URL = "http://testserver"
    SESSION_TYPE = None
    SESSION_COOKIE_SECURE = False
