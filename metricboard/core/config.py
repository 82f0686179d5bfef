"""Configuration system for the metrics dashboard."""
from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env file from project root
env_path = Path(__file__).parent.parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

DEFAULT_COLOR_PALETTE: tuple[str, ...] = (
    "#3B82F6",  # Blue
    "#10B981",  # Emerald
    "#F59E0B",  # Amber
    "#EF4444",  # Red
    "#8B5CF6",  # Violet
)
DEFAULT_METRIC_NAMES: tuple[str, ...] = ("Revenue", "Users")
DUPLICATE_POLICIES = frozenset({"first", "reject"})


@dataclass(slots=True)
class DatabaseSettings:
    """Connection details for the metrics database."""

    driver: str
    host: str
    port: int
    user: str
    password: str
    name: str
    url_override: str | None = None

    @property
    def sqlalchemy_url(self) -> str:
        """Build a SQLAlchemy compatible URL."""

        if self.url_override:
            return self.url_override
        if self.password:
            credentials = f"{self.user}:{self.password}"
        else:
            credentials = self.user
        return f"{self.driver}://{credentials}@{self.host}:{self.port}/{self.name}"


@dataclass(slots=True)
class AuthSettings:
    """Session token settings loaded from environment variables."""

    secret_key: str
    algorithm: str
    access_token_expire_minutes: int
    default_tenant_id: str
    cookie_name: str = "access_token"
    enabled: bool = True


@dataclass(slots=True)
class ChartSettings:
    """Presentation defaults for metric charts."""

    color_palette: tuple[str, ...] = DEFAULT_COLOR_PALETTE
    default_metric_names: tuple[str, ...] = DEFAULT_METRIC_NAMES
    title: str = "Metrics Overview"
    duplicate_policy: str = "first"
    fetch_limit: int = 30


@dataclass(slots=True)
class Settings:
    """Top-level application configuration container."""

    database: DatabaseSettings
    auth: AuthSettings
    charts: ChartSettings
    sqlalchemy_echo: bool = False

    @classmethod
    def from_env(cls) -> "Settings":
        """Load configuration values from environment variables."""

        def _get_env(name: str, default: str) -> str:
            return os.getenv(name, default)

        def _flag(value: str) -> bool:
            return value not in {"0", "false", "False", ""}

        def _parse_list(value: str, default: tuple[str, ...]) -> tuple[str, ...]:
            items = tuple(item.strip() for item in value.split(",") if item.strip())
            return items or default

        palette = _parse_list(_get_env("CHART_COLOR_PALETTE", ""), DEFAULT_COLOR_PALETTE)
        duplicate_policy = _get_env("CHART_DUPLICATE_POLICY", "first").strip().lower()
        if duplicate_policy not in DUPLICATE_POLICIES:
            raise ValueError(
                "CHART_DUPLICATE_POLICY must be one of: "
                + ", ".join(sorted(DUPLICATE_POLICIES))
            )
        fetch_limit = int(_get_env("METRICS_FETCH_LIMIT", "30"))
        if fetch_limit < 1:
            raise ValueError("METRICS_FETCH_LIMIT must be a positive integer.")

        db = DatabaseSettings(
            driver=_get_env("DB_DRIVER", "mysql+pymysql"),
            host=_get_env("DB_HOST", "127.0.0.1"),
            port=int(_get_env("DB_PORT", "3306")),
            user=_get_env("DB_USER", "metrics"),
            password=_get_env("DB_PASSWORD", "metrics"),
            name=_get_env("DB_NAME", "metrics"),
            url_override=os.getenv("DATABASE_URL") or None,
        )
        auth = AuthSettings(
            secret_key=_get_env("JWT_SECRET_KEY", "change-me"),
            algorithm=_get_env("JWT_ALGORITHM", "HS256"),
            access_token_expire_minutes=int(_get_env("JWT_EXPIRE_MINUTES", "120")),
            default_tenant_id=_get_env("DEFAULT_TENANT_ID", "demo"),
            enabled=_flag(_get_env("AUTH_ENABLED", "1")),
        )
        charts = ChartSettings(
            color_palette=palette,
            default_metric_names=_parse_list(
                _get_env("CHART_DEFAULT_METRICS", ""), DEFAULT_METRIC_NAMES
            ),
            title=_get_env("CHART_TITLE", "Metrics Overview"),
            duplicate_policy=duplicate_policy,
            fetch_limit=fetch_limit,
        )
        return cls(
            database=db,
            auth=auth,
            charts=charts,
            sqlalchemy_echo=_flag(_get_env("SQLALCHEMY_ECHO", "0")),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached ``Settings`` instance."""

    settings = Settings.from_env()

    # Import locally to avoid circular dependencies during module import time.
    from .logger import get_logger

    logger = get_logger(__name__)
    logger.debug(
        "Settings initialised",
        extra={
            "sqlalchemy_echo": settings.sqlalchemy_echo,
            "database": {
                "driver": settings.database.driver,
                "host": settings.database.host,
                "port": settings.database.port,
                "name": settings.database.name,
                "user": settings.database.user,
            },
            "auth": {
                "token_ttl": settings.auth.access_token_expire_minutes,
                "enabled": settings.auth.enabled,
            },
            "charts": {
                "palette_size": len(settings.charts.color_palette),
                "default_metrics": list(settings.charts.default_metric_names),
                "duplicate_policy": settings.charts.duplicate_policy,
            },
        },
    )
    return settings
