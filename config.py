"""
Modulo di configurazione per l'applicazione Flask Znote.
"""

import os
from pathlib import Path


BASE_DIR = Path(__file__).resolve().parent


class Config:
    """Configurazione base, comune a tutti gli ambienti."""

    # Chiavi segrete: in produzione vanno sovrascritte da variabili d'ambiente
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key-change-me")

    # --- AUTENTICAZIONE --------------------------------------------------------
    JWT_SECRET_KEY = os.environ.get("JWT_SECRET_KEY", SECRET_KEY)
    JWT_ALGORITHM = os.environ.get("JWT_ALGORITHM", "HS256")
    JWT_EXPIRES_DAYS = int(os.environ.get("JWT_EXPIRES_DAYS", "7"))

    # Fattore di costo bcrypt
    BCRYPT_ROUNDS = int(os.environ.get("BCRYPT_ROUNDS", "10"))

    # --- CONFIGURAZIONE DATABASE MYSQL --------------------------------------
    DB_USER = os.environ.get("DB_USER", "znote")
    DB_PASSWORD = os.environ.get("DB_PASSWORD", "znote")
    DB_HOST = os.environ.get("DB_HOST", "localhost")
    DB_PORT = os.environ.get("DB_PORT", "3306")
    DB_NAME = os.environ.get("DB_NAME", "znote")

    # Stringa di connessione composta in modo parametrico
    DEFAULT_DB_URL = (
        f"mysql+pymysql://{DB_USER}:{DB_PASSWORD}@{DB_HOST}:{DB_PORT}/{DB_NAME}"
    )

    SQLALCHEMY_DATABASE_URI = os.environ.get("DATABASE_URL", DEFAULT_DB_URL)
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # --- HTTP --------------------------------------------------------------------
    HOST = os.environ.get("HOST", "0.0.0.0")
    PORT = int(os.environ.get("PORT", "5000"))

    # Origine autorizzata a chiamare l'API dal browser (di default il dev server Vite)
    CORS_ORIGIN = os.environ.get("CORS_ORIGIN", "http://localhost:5173")

    # Limite massimo del corpo delle richieste (sync massiva compresa)
    MAX_CONTENT_LENGTH = 2 * 1024 * 1024

    # --- LOGGING -------------------------------------------------------------
    LOG_DIR = os.environ.get("LOG_DIR", str(BASE_DIR / "logs"))
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
    LOG_FILE_NAME = os.environ.get("LOG_FILE_NAME", "znote.log")


class DevConfig(Config):
    """Configurazione per ambiente di sviluppo."""
    DEBUG = True
    ENV = "development"
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "DEBUG")


class ProdConfig(Config):
    """Configurazione per ambiente di produzione."""
    DEBUG = False
    ENV = "production"
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")


class TestConfig(Config):
    """Configurazione per la suite di test (SQLite, hashing veloce)."""
    TESTING = True
    DEBUG = False
    ENV = "testing"
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    JWT_SECRET_KEY = "test-secret"
    # Costo minimo ammesso da bcrypt
    BCRYPT_ROUNDS = 4
    LOG_DIR = ""
    LOG_LEVEL = "WARNING"


CONFIGS = {
    "development": DevConfig,
    "production": ProdConfig,
    "testing": TestConfig,
}


def get_config(env_name=None):
    """Restituisce la classe di configurazione per ``env_name`` (o per la variabile ``ENV``)."""
    env_name = env_name or os.environ.get("ENV", "development")
    return CONFIGS.get(env_name, DevConfig)
