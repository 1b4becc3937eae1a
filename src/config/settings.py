"""Runtime configuration for PharmaControl.

Values are read once from the environment (and a `.env` file if present).
• LOW_STOCK_THRESHOLD    – units below which a product raises a critical alert.
• EXPIRY_WINDOW_DAYS     – lots expiring within this many days are flagged.
• ALERT_POLL_SECONDS     – interval of the notification polling timer.
• ROTATION_PERIOD_DAYS   – length of the period that rotation figures cover.
• Multiple API keys per provider for automatic rotation when rate limits are hit.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import List

from dotenv import load_dotenv  # type: ignore

# Load variables from .env if present
load_dotenv()


def _get_multiple_keys(prefix: str) -> List[str]:
    """Extract multiple API keys from environment variables with numbered suffixes."""
    keys = []

    base_key = os.getenv(prefix)
    if base_key:
        keys.append(base_key)

    # Then try numbered keys (1, 2, 3, ...)
    counter = 1
    while True:
        key = os.getenv(f"{prefix}_{counter}")
        if key:
            keys.append(key)
            counter += 1
        else:
            break

    return keys


def _get_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class PharmaSettings:
    """Immutable container for runtime parameters."""

    # --- Inventory rules --------------------------------------------------
    low_stock_threshold: int = int(os.getenv("LOW_STOCK_THRESHOLD", "10"))
    expiry_window_days: int = int(os.getenv("EXPIRY_WINDOW_DAYS", "90"))
    rotation_period_days: int = int(os.getenv("ROTATION_PERIOD_DAYS", "30"))

    # --- Notifications ----------------------------------------------------
    alert_poll_seconds: int = int(os.getenv("ALERT_POLL_SECONDS", "30"))
    regulatory_update_probability: float = float(
        os.getenv("REGULATORY_UPDATE_PROBABILITY", "0.2")
    )

    # --- LLM provider keys for rotation -----------------------------------
    openrouter_api_keys: List[str] = None  # Will be populated in __post_init__
    groq_api_keys: List[str] = None
    gemini_api_keys: List[str] = None

    gemini_api_key: str | None = None

    # Default models per provider / task
    gemini_chat_model: str = os.getenv("GEMINI_CHAT_MODEL", "gemini-2.5-flash")
    gemini_vision_model: str = os.getenv("GEMINI_VISION_MODEL", "gemini-2.5-pro")
    gemini_analysis_model: str = os.getenv("GEMINI_ANALYSIS_MODEL", "gemini-2.5-pro")
    openrouter_chat_model: str = os.getenv(
        "OPENROUTER_CHAT_MODEL", "google/gemini-2.0-flash-exp:free"
    )
    groq_chat_model: str = os.getenv("GROQ_CHAT_MODEL", "llama-3.1-8b-instant")

    enable_search_grounding: bool = _get_bool("ENABLE_SEARCH_GROUNDING", "true")

    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    def __post_init__(self):
        """Load multiple keys after initialization."""
        # Use object.__setattr__ because dataclass is frozen
        if self.openrouter_api_keys is None:
            object.__setattr__(self, "openrouter_api_keys", _get_multiple_keys("OPENROUTER_API_KEY"))
        if self.groq_api_keys is None:
            object.__setattr__(self, "groq_api_keys", _get_multiple_keys("GROQ_API_KEY"))
        if self.gemini_api_keys is None:
            object.__setattr__(self, "gemini_api_keys", _get_multiple_keys("GEMINI_API_KEY"))

        if self.gemini_api_key is None:
            object.__setattr__(
                self, "gemini_api_key", self.gemini_api_keys[0] if self.gemini_api_keys else None
            )

    @property
    def has_llm_keys(self) -> bool:
        return bool(self.openrouter_api_keys or self.groq_api_keys or self.gemini_api_keys)


# Singleton used by most callers
SETTINGS = PharmaSettings()


def update_from_kwargs(**overrides):  # type: ignore[override]
    """Return a new PharmaSettings with supplied overrides."""

    return PharmaSettings(
        low_stock_threshold=overrides.get("low_stock_threshold", SETTINGS.low_stock_threshold),
        expiry_window_days=overrides.get("expiry_window_days", SETTINGS.expiry_window_days),
        rotation_period_days=overrides.get("rotation_period_days", SETTINGS.rotation_period_days),
        alert_poll_seconds=overrides.get("alert_poll_seconds", SETTINGS.alert_poll_seconds),
        regulatory_update_probability=overrides.get(
            "regulatory_update_probability", SETTINGS.regulatory_update_probability
        ),
        openrouter_api_keys=overrides.get("openrouter_api_keys", SETTINGS.openrouter_api_keys),
        groq_api_keys=overrides.get("groq_api_keys", SETTINGS.groq_api_keys),
        gemini_api_keys=overrides.get("gemini_api_keys", SETTINGS.gemini_api_keys),
        gemini_chat_model=overrides.get("gemini_chat_model", SETTINGS.gemini_chat_model),
        gemini_vision_model=overrides.get("gemini_vision_model", SETTINGS.gemini_vision_model),
        gemini_analysis_model=overrides.get("gemini_analysis_model", SETTINGS.gemini_analysis_model),
        openrouter_chat_model=overrides.get("openrouter_chat_model", SETTINGS.openrouter_chat_model),
        groq_chat_model=overrides.get("groq_chat_model", SETTINGS.groq_chat_model),
        enable_search_grounding=overrides.get(
            "enable_search_grounding", SETTINGS.enable_search_grounding
        ),
        log_level=overrides.get("log_level", SETTINGS.log_level),
    )
