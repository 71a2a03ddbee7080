# config.py
import os

from dotenv import load_dotenv

# Load .env variables
load_dotenv()


def database_uri():
    url = os.getenv("DATABASE_URL")
    if url:
        return url

    # MySQL when the DB_* variables are present, local sqlite otherwise
    if os.getenv("DB_NAME"):
        return (
            f"mysql+pymysql://{os.getenv('DB_USER')}:{os.getenv('DB_PASSWORD')}"
            f"@{os.getenv('DB_HOST', 'localhost')}/{os.getenv('DB_NAME')}"
        )
    return "sqlite:///pocketbook.db"


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-key-change-me")
    SQLALCHEMY_DATABASE_URI = database_uri()
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    DEFAULT_CURRENCY = os.getenv("DEFAULT_CURRENCY", "IDR")


class TestConfig(Config):
    TESTING = True
    SECRET_KEY = "test-key"
    SQLALCHEMY_DATABASE_URI = "sqlite://"
