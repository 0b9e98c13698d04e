import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "protocol_desk_test"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")

APP_URL = "http://testserver"
DEPARTMENT_NAME = "Protocol Department"
TOKEN_MAX_AGE_DAYS = 365

CLOUDINARY_CLOUD_NAME = "test-cloud"
CLOUDINARY_UPLOAD_PRESET = "test-preset"
CLOUDINARY_FOLDER = "protocol-visitors"
UPLOAD_TIMEOUT_SECONDS = 5.0

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
