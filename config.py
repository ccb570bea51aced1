"""Configuration module for Flask application."""
import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Config:
    """Base configuration class."""

    # Flask
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key-change-in-production')
    DEBUG = os.getenv('FLASK_DEBUG', '1') == '1'
    ENV = os.getenv('FLASK_ENV', 'development')
    TESTING = False

    # Session Configuration
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = os.getenv('SESSION_COOKIE_SAMESITE', 'Lax')
    # Lifetime of a remember-me login (seconds)
    PERMANENT_SESSION_LIFETIME = int(os.getenv('PERMANENT_SESSION_LIFETIME', str(30 * 86400)))

    # Authentication (single hardcoded account for the shop)
    APP_USERNAME = os.getenv('APP_USERNAME', 'Deepak@123')
    APP_PASSWORD = os.getenv('APP_PASSWORD', '3344')

    # Storage - key/value table holding the serialized application state
    DATABASE_URL = os.getenv('DATABASE_URL', 'sqlite:///tailorshop.db')
    SQLALCHEMY_DATABASE_URI = DATABASE_URL
    SQLALCHEMY_ECHO = os.getenv('SQLALCHEMY_ECHO', 'false').lower() == 'true'

    # Storage keys
    STATE_STORAGE_KEY = os.getenv('STATE_STORAGE_KEY', 'tailorShopState')
    AUTH_STORAGE_KEY = os.getenv('AUTH_STORAGE_KEY', 'tailorShopAuth')
    THEME_STORAGE_KEY = os.getenv('THEME_STORAGE_KEY', 'tailorShopTheme')

    # Business Information (seed for the shop info singleton)
    DEFAULT_SHOP_NAME = os.getenv('DEFAULT_SHOP_NAME', 'Deepak Tailor')
    DEFAULT_SHOP_TAGLINE = os.getenv('DEFAULT_SHOP_TAGLINE', 'Perfect Fit, Every Time')
    DEFAULT_SHOP_ADDRESS = os.getenv('DEFAULT_SHOP_ADDRESS', '')
    DEFAULT_SHOP_PHONE = os.getenv('DEFAULT_SHOP_PHONE', '')

    # Orders
    ORDER_NUMBER_PREFIX = os.getenv('ORDER_NUMBER_PREFIX', 'DT')
    SHOP_TIMEZONE = os.getenv('SHOP_TIMEZONE', 'Asia/Kolkata')

    # Outbound messaging (wa.me links)
    WHATSAPP_COUNTRY_CODE = os.getenv('WHATSAPP_COUNTRY_CODE', '91')

    # Backups
    BACKUP_FILE_PREFIX = os.getenv('BACKUP_FILE_PREFIX', 'deepak-tailor')


class TestConfig(Config):
    """Configuration used by the test suite (in-memory SQLite)."""

    TESTING = True
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    SQLALCHEMY_ECHO = False
