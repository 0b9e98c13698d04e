"""Constants and defaults.

Token lifetime, photo upload limits and database pool defaults.
"""

DEFAULT_DEPARTMENT_NAME = "Protocol Department"
DEFAULT_TOKEN_MAX_AGE_DAYS = 365
AUTH_COOKIE_NAME = "auth-token"

DEFAULT_PBKDF2_ITERATIONS = 150000
BCRYPT_ROUNDS = 12

MAX_PHOTOS_PER_VISITOR = 10
MAX_PHOTO_BYTES = 10 * 1024 * 1024
PHOTO_FOLDER = "protocol-visitors"
DEFAULT_UPLOAD_TIMEOUT_SECONDS = 30

DB_CONNECT_TIMEOUT_SECONDS = 5
DB_POOL_SIZE = 5

MAX_COMPANION_WORKERS = 8
