import os
from dotenv import load_dotenv

from movie_reviews.config.paths import ENV_PATH

load_dotenv(dotenv_path=ENV_PATH)

JWT_SECRET_KEY = os.getenv('JWT_SECRET_KEY')
if not JWT_SECRET_KEY:
    raise ValueError("JWT_SECRET_KEY is not set")

JWT_ALGORITHM = os.getenv('JWT_ALGORITHM', 'HS256')

# tokens live for one day unless overridden
JWT_ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv('JWT_ACCESS_TOKEN_EXPIRE_MINUTES', '1440'))
if JWT_ACCESS_TOKEN_EXPIRE_MINUTES <= 0:
    raise ValueError("JWT_ACCESS_TOKEN_EXPIRE_MINUTES must be positive")

BCRYPT_ROUNDS = int(os.getenv('BCRYPT_ROUNDS', '12'))

USE_SQLITE = os.getenv('USE_SQLITE', 'false').lower() == 'true'
SQLITE_PATH = os.getenv('SQLITE_PATH', './movie_reviews.db')

DB_USER = os.getenv('DB_USER')
DB_PASSWORD = os.getenv('DB_PASSWORD')
DB_HOST = os.getenv('DB_HOST')
DB_PORT = os.getenv('DB_PORT', '5432')
DB_NAME = os.getenv('DB_NAME', 'movie_reviews')

if not USE_SQLITE:
    if not DB_USER:
        raise ValueError("DB_USER is not set")
    if not DB_PASSWORD:
        raise ValueError("DB_PASSWORD is not set")
    if not DB_HOST:
        raise ValueError("DB_HOST is not set")

LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()
LOG_DIR = os.getenv('LOG_DIR', 'logs')
