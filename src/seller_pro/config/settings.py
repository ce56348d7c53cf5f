"""
Centralized settings for the listing tool.

Values come from environment variables; a ``.env`` file in the project root
is loaded first when present.
"""
import os
from pathlib import Path
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv


def get_project_root() -> Path:
    """Get the project root directory (where pyproject.toml lives)."""
    current = Path(__file__).resolve()
    for parent in current.parents:
        if (parent / 'pyproject.toml').exists() or (parent / '.env').exists():
            return parent
    # Fallback to 4 levels up from this file
    return Path(__file__).resolve().parent.parent.parent.parent


def _env_float(name: str, default: float) -> float:
    """Read a float from the environment, keeping the default on bad input."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        return default


@dataclass
class Settings:
    """Application settings with sensible defaults."""

    project_root: Path

    # AI content generation
    openai_api_key: Optional[str] = None
    openai_model: str = "gpt-4o-mini"

    # Display
    currency_symbol: str = "₹"

    # Default fee form (target settlement 1000, GST 18%, shipping 80, platform 10%, fixed 20)
    default_target_net_settlement: float = 1000.0
    default_gst_percentage: float = 18.0
    default_shipping_charges: float = 80.0
    default_platform_fee_percentage: float = 10.0
    default_fixed_fee: float = 20.0

    @property
    def content_enabled(self) -> bool:
        """True when an API key is available for content generation."""
        return bool(self.openai_api_key)

    @classmethod
    def load(cls, project_root: Optional[Path] = None) -> 'Settings':
        """Load settings from the environment (and .env if present)."""
        root = project_root or get_project_root()

        env_file = root / '.env'
        if env_file.exists():
            load_dotenv(env_file)

        return cls(
            project_root=root,
            openai_api_key=os.getenv('OPENAI_API_KEY') or None,
            openai_model=os.getenv('SELLER_PRO_MODEL', 'gpt-4o-mini'),
            currency_symbol=os.getenv('SELLER_PRO_CURRENCY', '₹'),
            default_target_net_settlement=_env_float('SELLER_PRO_DEFAULT_SETTLEMENT', 1000.0),
            default_gst_percentage=_env_float('SELLER_PRO_DEFAULT_GST', 18.0),
            default_shipping_charges=_env_float('SELLER_PRO_DEFAULT_SHIPPING', 80.0),
            default_platform_fee_percentage=_env_float('SELLER_PRO_DEFAULT_PLATFORM_FEE', 10.0),
            default_fixed_fee=_env_float('SELLER_PRO_DEFAULT_FIXED_FEE', 20.0),
        )


# Default settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings.load()
    return _settings
