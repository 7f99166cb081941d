"""
Pricing Configuration
Loads environment variables and provides configuration classes for different environments
"""

import os
from dotenv import load_dotenv

# Load environment variables from the .env file at the project root
basedir = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
load_dotenv(os.path.join(basedir, '.env'))


class Config:
    """Base configuration class"""

    # Tax (ITBIS 18% by default, prices stored tax-inclusive)
    TAX_RATE = float(os.environ.get('TAX_RATE', 0.18))
    PRICES_INCLUDE_TAX = os.environ.get('PRICES_INCLUDE_TAX', 'True').lower() == 'true'

    # Currency
    CURRENCY = os.environ.get('CURRENCY', 'DOP')
    CURRENCY_SYMBOL = os.environ.get('CURRENCY_SYMBOL', 'RD$')

    # Logging
    LOG_FOLDER = os.path.join(basedir, os.environ.get('LOG_FOLDER', 'logs'))
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    LOG_TO_FILE = os.environ.get('LOG_TO_FILE', 'False').lower() == 'true'


class DevelopmentConfig(Config):
    """Development configuration"""
    DEBUG = True
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'DEBUG')


class ProductionConfig(Config):
    """Production configuration"""
    DEBUG = False
    LOG_TO_FILE = os.environ.get('LOG_TO_FILE', 'True').lower() == 'true'


class TestingConfig(Config):
    """Testing configuration"""
    TESTING = True
    TAX_RATE = 0.18
    PRICES_INCLUDE_TAX = True
    LOG_TO_FILE = False


# Configuration dictionary
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
