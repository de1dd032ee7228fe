"""Configuration classes, selected by name through ``FLASK_CONFIG``."""

import os
from dotenv import load_dotenv

load_dotenv()


class Config:
    """Base configuration."""
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production'
    
    # CSRF Configuration
    WTF_CSRF_ENABLED = True
    WTF_CSRF_CHECK_DEFAULT = True
    WTF_CSRF_TIME_LIMIT = 3600  # 1 hour
    
    # Database - Using SQLite for easy local development
    basedir = os.path.dirname(os.path.dirname(__file__))
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or \
        f'sqlite:///{os.path.join(basedir, "instance", "malchin.db")}'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    
    # Image hosting (ImgBB)
    IMGBB_API_KEY = os.environ.get('IMGBB_API_KEY', '')
    IMGBB_UPLOAD_URL = os.environ.get('IMGBB_UPLOAD_URL', 'https://api.imgbb.com/1/upload')
    IMGBB_TIMEOUT = int(os.environ.get('IMGBB_TIMEOUT', 30))
    MAX_CONTENT_LENGTH = 16 * 1024 * 1024  # 16MB max file size
    ALLOWED_EXTENSIONS = {'png', 'jpg', 'jpeg', 'gif', 'webp'}
    
    # Pagination
    ITEMS_PER_PAGE = 12
    MAX_ITEMS_PER_PAGE = 48
    
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    

class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True
    SQLALCHEMY_ECHO = False
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'DEBUG')


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False
    

class TestingConfig(Config):
    """Testing configuration."""
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    WTF_CSRF_ENABLED = False
    IMGBB_API_KEY = 'test-key'
    BCRYPT_LOG_ROUNDS = 4


config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
