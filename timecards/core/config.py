import os
from dataclasses import dataclass
from enum import Enum


class UpdateMode(Enum):
    STRICT = "strict"
    PERMISSIVE = "permissive"


DEV_ENVS = {"dev", "local", "test"}


def _env_str(name: str, default: str) -> str:
    v = os.getenv(name)
    if v is None or v.strip() == "":
        return default
    return v.strip()


def _env_int(name: str, default: int) -> int:
    v = os.getenv(name)
    if v is None or v == "":
        return default
    try:
        return int(v)
    except ValueError:
        return default


def _env_bool(name: str, default: bool) -> bool:
    v = os.getenv(name)
    if v is None:
        return default
    return v.strip() not in {"0", "false", "False", "no", "NO"}


def _env_update_mode(name: str, default: UpdateMode) -> UpdateMode:
    v = os.getenv(name)
    if v is None or v.strip() == "":
        return default
    try:
        return UpdateMode(v.strip().lower())
    except ValueError as exc:
        raise ValueError(f"{name} must be one of: strict, permissive") from exc


@dataclass(frozen=True)
class Settings:
    env: str
    database_url: str
    log_level: str
    jwt_exp_hours: int
    update_mode: UpdateMode
    expose_error_details: bool

    @property
    def dev_routes_enabled(self) -> bool:
        return self.env in DEV_ENVS


def get_settings() -> Settings:
    """Read settings from the environment on every call so tests can monkeypatch."""
    return Settings(
        env=_env_str("ENV", "dev").lower(),
        database_url=_env_str("DATABASE_URL", "postgresql://localhost/timecards"),
        log_level=_env_str("LOG_LEVEL", "INFO").upper(),
        jwt_exp_hours=_env_int("JWT_EXP_HOURS", 8),
        update_mode=_env_update_mode("TIMECARD_UPDATE_MODE", UpdateMode.STRICT),
        expose_error_details=_env_bool("EXPOSE_ERROR_DETAILS", True),
    )
