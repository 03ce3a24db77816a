# /config.py
import os

from dotenv import load_dotenv

load_dotenv()

# Caminho base do projeto
basedir = os.path.abspath(os.path.dirname(__file__))
db_path = os.path.join(basedir, "instance")
os.makedirs(db_path, exist_ok=True)


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or "uma_chave_muito_dificil_de_adivinhar"
    ENV_NAME = os.environ.get("FLASK_ENV", "development")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or \
        f"sqlite:///{os.path.join(db_path, 'app.db')}"
    SQLALCHEMY_ENGINE_OPTIONS = {
        "pool_pre_ping": True,
        "pool_recycle": 300,
    }

    # Rover sem dados por OFFLINE_THRESHOLD segundos vira offline;
    # a verificação roda a cada LIVENESS_CHECK_INTERVAL segundos.
    LIVENESS_CHECK_INTERVAL = int(os.environ.get('LIVENESS_CHECK_INTERVAL', 10))
    OFFLINE_THRESHOLD = int(os.environ.get('OFFLINE_THRESHOLD', 30))

    STATS_DEFAULT_DAYS = 30
    DEFAULT_PAGE_SIZE = 20

    TOKEN_MAX_AGE = int(os.environ.get('TOKEN_MAX_AGE', 86400))

    STORE_CONNECT_RETRIES = 5
    STORE_CONNECT_BACKOFF = 0.5


class TestingConfig(Config):
    TESTING = True
    ENV_NAME = "testing"
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    SQLALCHEMY_ENGINE_OPTIONS = {}
    WTF_CSRF_ENABLED = False
