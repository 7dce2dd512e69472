"""
Configuration loader for the payment faker
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, model_validator

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent.parent / "config" / "payment_faker.yml"

ENV_PREFIX = "PAYMENT_FAKER_"

# env var suffix -> FakerConfig field
_ENV_FIELDS = {
    "API_KEY": "api_key",
    "API_SECRET": "api_secret",
    "BASE_URL": "base_url",
    "CHECKOUT_PATH": "checkout_path",
    "SIMULATE_DELAYS": "simulate_delays",
    "SUCCESS_RATE": "success_rate",
    "DELAY_MIN_MS": "delay_min_ms",
    "DELAY_MAX_MS": "delay_max_ms",
    "ALLOW_OVERWRITE": "allow_overwrite",
}


class FakerConfig(BaseModel):
    """Payment faker configuration"""

    api_key: str = "test_api_key"
    api_secret: str = "test_api_secret"
    base_url: str = "https://faker.payment.test"
    checkout_path: Optional[str] = None
    simulate_delays: bool = False
    success_rate: float = Field(default=1.0, ge=0.0, le=1.0)
    delay_min_ms: int = Field(default=100, ge=0)
    delay_max_ms: int = Field(default=500, ge=0)
    allow_overwrite: bool = True

    @model_validator(mode="after")
    def _check_delay_bounds(self) -> "FakerConfig":
        if self.delay_min_ms > self.delay_max_ms:
            raise ValueError("delay_min_ms must not exceed delay_max_ms")
        return self


def _env_overrides() -> Dict[str, Any]:
    overrides: Dict[str, Any] = {}
    for suffix, field_name in _ENV_FIELDS.items():
        value = os.getenv(ENV_PREFIX + suffix)
        if value is not None and value.strip() != "":
            overrides[field_name] = value.strip()
    return overrides


def load_faker_config(config_path: Optional[Path] = None, use_env: bool = True) -> FakerConfig:
    """
    Load and validate faker configuration from a YAML file plus environment.

    Args:
        config_path: Path to config file. Defaults to config/payment_faker.yml;
            when the default file is absent, built-in defaults are used.
        use_env: Apply PAYMENT_FAKER_* environment overrides (a .env file is
            loaded first when present).

    Returns:
        Validated FakerConfig object

    Raises:
        FileNotFoundError: If an explicitly given config file doesn't exist
        ValidationError: If config doesn't match schema
    """
    config_data: Dict[str, Any] = {}

    if config_path is not None and not Path(config_path).exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    path = Path(config_path) if config_path is not None else DEFAULT_CONFIG_PATH
    if path.exists():
        with open(path, "r", encoding="utf-8") as f:
            loaded = yaml.safe_load(f) or {}
        if not isinstance(loaded, dict):
            raise ValueError(f"Config file {path} must contain a mapping, got {type(loaded).__name__}")
        # Accept both a bare mapping and one nested under "payment_faker"
        section = loaded.get("payment_faker", loaded)
        if not isinstance(section, dict):
            raise ValueError(f"\"payment_faker\" section in {path} must be a mapping")
        config_data.update(section)
    else:
        logger.debug(f"No config file at {path}; using defaults")

    if use_env:
        load_dotenv()
        config_data.update(_env_overrides())

    try:
        config = FakerConfig(**config_data)
        logger.info(f"Loaded payment faker config (base_url={config.base_url})")
        return config
    except ValidationError as e:
        logger.error(f"Config validation failed: {e}")
        raise
