"""
Configuration loader for the storefront sync layer.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

from storefront.integrations.clients.real_http.base import DEFAULT_BASE_URL

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config" / "storefront.yml"


class ApiConfig(BaseModel):
    base_url: str = DEFAULT_BASE_URL
    timeout_seconds: float = Field(default=15.0, gt=0)


class SearchConfig(BaseModel):
    debounce_seconds: float = Field(default=0.5, ge=0.0)


class BackendConfig(BaseModel):
    """Serve requests from the in-process mock backend instead of the network."""

    use_mock: bool = False


class StorefrontConfig(BaseModel):
    api: ApiConfig = Field(default_factory=ApiConfig)
    search: SearchConfig = Field(default_factory=SearchConfig)
    backend: BackendConfig = Field(default_factory=BackendConfig)


def _env_flag(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def load_storefront_config(config_path: Optional[Path] = None) -> StorefrontConfig:
    """
    Load and validate storefront configuration from YAML, then apply env overrides

    Args:
        config_path: Path to config file. Defaults to config/storefront.yml

    Returns:
        Validated StorefrontConfig object

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValidationError: If config doesn't match schema
    """
    load_dotenv()

    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH

    if not config_path.exists():
        raise FileNotFoundError(f"Storefront config file not found: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    api_url = os.getenv("STOREFRONT_API_URL")
    if api_url:
        data["api"] = {**(data.get("api") or {}), "base_url": api_url}
    use_mock = os.getenv("STOREFRONT_USE_MOCK_BACKEND")
    if use_mock:
        data["backend"] = {**(data.get("backend") or {}), "use_mock": _env_flag(use_mock)}

    try:
        cfg = StorefrontConfig(**data)
        logger.info("Successfully loaded storefront config from %s", config_path)
        return cfg
    except ValidationError as e:
        logger.error("Storefront config validation failed: %s", e)
        raise
