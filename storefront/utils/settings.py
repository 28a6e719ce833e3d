# storefront/utils/settings.py
import os
from dotenv import load_dotenv

load_dotenv()


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "memory")  # memory | sql
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./storefront.db")

LOCK_BACKEND = os.getenv("LOCK_BACKEND", "local")  # local | redis
REDIS_URL = os.getenv("REDIS_URL", "redis://redis:6379/0")
LOCK_TTL_SECONDS = int(os.getenv("LOCK_TTL_SECONDS", 30))
LOCK_WAIT_SECONDS = float(os.getenv("LOCK_WAIT_SECONDS", 5))

BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", 10))

CELERY_BROKER_URL = os.getenv("CELERY_BROKER_URL", "redis://redis:6379/1")
CELERY_RESULT_BACKEND = os.getenv("CELERY_RESULT_BACKEND", "redis://redis:6379/2")
CELERY_TASK_ALWAYS_EAGER = _flag("CELERY_TASK_ALWAYS_EAGER", "false")
NOTIFICATIONS_ENABLED = _flag("NOTIFICATIONS_ENABLED", "true")

SEED_DEMO_DATA = _flag("SEED_DEMO_DATA", "true")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
