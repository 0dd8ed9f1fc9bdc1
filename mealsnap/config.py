"""Configuration and logging setup.

Settings come from environment variables, optionally seeded from a .env
file (python-dotenv). Every invalid value raises ValueError naming the
offending variable so misconfiguration fails at startup.

Example .env:
    ANALYSIS_PROVIDER=openai
    OPENAI_API_KEY=sk-...
    MEAL_STORE=http
    MEAL_STORE_URL=https://api.example.com/meals
    MEAL_LANGUAGE=he
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional, Union

import structlog
from dotenv import load_dotenv

from mealsnap.domain.meal.core.value_objects import Language

ANALYSIS_PROVIDERS = ("stub", "openai")
MEAL_STORES = ("memory", "http")
DEFAULT_OPENAI_MODEL = "gpt-4o-2024-08-06"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class Settings:
    """Runtime configuration for the capture workflow."""

    language: Language = Language.ENGLISH
    analysis_provider: str = "stub"
    openai_api_key: Optional[str] = field(default=None, repr=False)
    openai_model: str = DEFAULT_OPENAI_MODEL
    analysis_timeout_s: float = 60.0
    submission_timeout_s: float = 30.0
    meal_store: str = "memory"
    meal_store_url: Optional[str] = None
    meal_store_token: Optional[str] = field(default=None, repr=False)
    log_level: str = "INFO"

    @classmethod
    def from_env(
        cls,
        env: Optional[Mapping[str, str]] = None,
        dotenv_path: Optional[Union[str, Path]] = None,
    ) -> "Settings":
        """
        Build settings from environment variables.

        Args:
            env: Mapping to read instead of os.environ (no .env loading then)
            dotenv_path: Explicit .env file; default searches from the cwd

        Raises:
            ValueError: If a variable has an invalid value or a required
                companion variable is missing
        """
        if env is None:
            load_dotenv(dotenv_path)
            env = os.environ

        language_code = env.get("MEAL_LANGUAGE", "en").strip().lower()
        try:
            language = Language.from_code(language_code)
        except ValueError:
            raise ValueError(
                f"MEAL_LANGUAGE must be one of {[lang.value for lang in Language]}, "
                f"got {language_code!r}"
            ) from None

        analysis_provider = _choice(env, "ANALYSIS_PROVIDER", "stub", ANALYSIS_PROVIDERS)
        openai_api_key = env.get("OPENAI_API_KEY") or None
        if analysis_provider == "openai" and not openai_api_key:
            raise ValueError(
                "ANALYSIS_PROVIDER=openai but OPENAI_API_KEY not set. "
                "Set OPENAI_API_KEY in .env or use ANALYSIS_PROVIDER=stub"
            )

        meal_store = _choice(env, "MEAL_STORE", "memory", MEAL_STORES)
        meal_store_url = env.get("MEAL_STORE_URL") or None
        if meal_store == "http" and not meal_store_url:
            raise ValueError("MEAL_STORE=http but MEAL_STORE_URL not set")

        log_level = env.get("LOG_LEVEL", "INFO").strip().upper()
        if log_level not in LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {list(LOG_LEVELS)}, got {log_level!r}")

        return cls(
            language=language,
            analysis_provider=analysis_provider,
            openai_api_key=openai_api_key,
            openai_model=env.get("OPENAI_MODEL") or DEFAULT_OPENAI_MODEL,
            analysis_timeout_s=_positive_float(env, "ANALYSIS_TIMEOUT_S", 60.0),
            submission_timeout_s=_positive_float(env, "SUBMISSION_TIMEOUT_S", 30.0),
            meal_store=meal_store,
            meal_store_url=meal_store_url,
            meal_store_token=env.get("MEAL_STORE_TOKEN") or None,
            log_level=log_level,
        )


def _choice(env: Mapping[str, str], name: str, default: str, allowed: tuple) -> str:
    value = env.get(name, default).strip().lower()
    if value not in allowed:
        raise ValueError(f"{name} must be one of {list(allowed)}, got {value!r}")
    return value


def _positive_float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None
    if not value > 0 or value == float("inf"):
        raise ValueError(f"{name} must be a positive number, got {raw!r}")
    return value


def configure_logging(level: str = "INFO") -> None:
    """
    Configure stdlib logging and route structlog through it.

    Args:
        level: Log level name (e.g. "DEBUG")
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.KeyValueRenderer(key_order=["event"]),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
