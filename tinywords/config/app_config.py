"""
Configuration Management Module

Centralized configuration management following the 12-factor app methodology.
All configuration is loaded from environment variables with sensible defaults.
"""

import os
from dotenv import load_dotenv

# Load environment variables from config.env
load_dotenv(os.path.join(os.path.dirname(os.path.abspath(__file__)), 'config.env'))


class Config:
    """Base configuration class with all settings."""

    # Flask Settings
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key-change-in-production')
    DEBUG = os.getenv('DEBUG', 'False').lower() == 'true'

    # Server Settings
    HOST = os.getenv('HOST', '127.0.0.1')
    PORT = int(os.getenv('PORT', 5000))

    # Word Catalog Settings
    MONGO_URI = os.getenv('MONGO_URI')
    MONGO_DB_NAME = os.getenv('MONGO_DB_NAME', 'tiny_little_words')
    MONGO_TIMEOUT_MS = int(os.getenv('MONGO_TIMEOUT_MS', 3000))

    # Dictionary Lookup Settings
    DICTIONARY_API_BASE = os.getenv('DICTIONARY_API_BASE', 'https://api.dictionaryapi.dev/api/v2/entries/en')
    DICTIONARY_TIMEOUT_SECONDS = float(os.getenv('DICTIONARY_TIMEOUT_SECONDS', 5))

    # Stats Storage Settings
    STATS_DIR = os.getenv('STATS_DIR', 'data')

    # Player Registry Settings
    MAX_ENGINES = int(os.getenv('MAX_ENGINES', 1000))

    # Logging Settings
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    LOG_DIR = os.getenv('LOG_DIR', 'logs')


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False


class TestingConfig(Config):
    """Testing configuration."""
    TESTING = True
    DEBUG = True
    MONGO_URI = None
    STATS_DIR = None


# Configuration mapping
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
