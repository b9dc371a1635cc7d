
import os
from dotenv import load_dotenv

load_dotenv()

DEFAULT_TABLE_CAPACITIES = "2,2,2,2,4,4,4,4,4,4,10,4,4,4,4,6,6,4,4,2,2,4,4,4,4,4,6,6,4,4"
DEFAULT_LUNCH_SLOTS = "11:30-12:30,12:30-13:30,13:30-14:30"
DEFAULT_DINNER_ROUNDS = "D1=19:30-21:00,D2=21:00-22:30,D3=22:30-24:00"


def _csv(value: str) -> list[str]:
    return [part.strip() for part in value.split(",") if part.strip()]


def parse_capacities(value: str) -> list[int]:
    return [int(part) for part in _csv(value)]


def parse_rounds(value: str) -> list[tuple[str, str]]:
    """'D1=19:30-21:00,D2=...' -> [('D1', '19:30-21:00'), ...]"""
    rounds = []
    for part in _csv(value):
        rid, sep, label = part.partition("=")
        if not sep or not rid.strip():
            raise ValueError(f"Dinner round {part!r} must look like ID=label.")
        rounds.append((rid.strip(), label.strip()))
    return rounds


def engine_options(uri: str, timeout: float) -> dict:
    """Bounds every wait on the database by ``timeout`` seconds."""
    if uri.startswith("sqlite"):
        return {"connect_args": {"timeout": timeout}}
    return {
        "pool_pre_ping": True,
        "pool_timeout": timeout,
        "connect_args": {"connect_timeout": max(int(timeout), 1)},
    }


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret")
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///local.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    STORE_BACKEND = os.getenv("STORE_BACKEND", "sql")
    STORE_TIMEOUT = float(os.getenv("STORE_TIMEOUT", "5"))
    STORE_CONFLICT_RETRIES = int(os.getenv("STORE_CONFLICT_RETRIES", "3"))
    TABLE_CAPACITIES = parse_capacities(os.getenv("TABLE_CAPACITIES", DEFAULT_TABLE_CAPACITIES))
    LUNCH_SLOTS = _csv(os.getenv("LUNCH_SLOTS", DEFAULT_LUNCH_SLOTS))
    DINNER_ROUNDS = parse_rounds(os.getenv("DINNER_ROUNDS", DEFAULT_DINNER_ROUNDS))
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
