import os
from dotenv import load_dotenv
from datetime import timedelta

# Load environment variables
load_dotenv()


class Config:
    # Basic Flask configuration
    SECRET_KEY = os.getenv('SECRET_KEY', 'your_secret_key')  # Change this in production

    # Session
    PERMANENT_SESSION_LIFETIME = timedelta(hours=int(os.getenv('SESSION_LIFETIME_HOURS', '24')))
    SESSION_COOKIE_SECURE = os.getenv('SESSION_COOKIE_SECURE', 'false').lower() == 'true'
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'

    # Where unauthenticated users are sent
    LOGIN_ROUTE = os.getenv('LOGIN_ROUTE', '/login')

    # Sign in: identity provider tokens are HS256 JWTs signed with this secret
    IDENTITY_TOKEN_SECRET = os.getenv('IDENTITY_TOKEN_SECRET', '')
    IDENTITY_TOKEN_ALGORITHM = os.getenv('IDENTITY_TOKEN_ALGORITHM', 'HS256')
    # Accept a bare user_id at /login (local development and tests only)
    ALLOW_ID_SIGN_IN = os.getenv('ALLOW_ID_SIGN_IN', 'false').lower() == 'true'

    # Front end origins allowed to call the API
    CORS_ORIGINS = [
        origin.strip()
        for origin in os.getenv(
            'CORS_ORIGINS',
            'http://localhost:3000,http://localhost:5173,http://127.0.0.1:3000'
        ).split(',')
        if origin.strip()
    ]

    # Logging
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    LOG_DIR = os.getenv('LOG_DIR', 'logs')
    LOG_TO_FILE = os.getenv('LOG_TO_FILE', 'true').lower() == 'true'

    # User store seeding
    SEED_USERS_FILE = os.getenv('SEED_USERS_FILE', '')
    DEFAULT_ADMIN_ID = os.getenv('DEFAULT_ADMIN_ID', 'admin')
    DEFAULT_ADMIN_EMAIL = os.getenv('DEFAULT_ADMIN_EMAIL', 'admin@example.com')
    CREATE_DEFAULT_ADMIN = os.getenv('CREATE_DEFAULT_ADMIN', 'true').lower() == 'true'

    # Development server
    HOST = os.getenv('HOST', '0.0.0.0')
    PORT = int(os.getenv('PORT', '5000'))


class TestingConfig(Config):
    TESTING = True
    SECRET_KEY = 'test-secret-key'
    LOG_TO_FILE = False
    CREATE_DEFAULT_ADMIN = False
    ALLOW_ID_SIGN_IN = True
    SEED_USERS_FILE = ''
