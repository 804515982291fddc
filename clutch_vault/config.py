"""Client configuration management."""

import logging
import os
from functools import lru_cache
from pathlib import Path

from .schemas import VaultConfig
from .utils import coerce_number, load_json

logger = logging.getLogger('clutch_vault.config')

CONFIG_PATH = Path(__file__).parent.parent / 'data' / 'vault_config.json'

# Environment variables that override file settings
ENV_API_URL = 'CLUTCH_API_URL'
ENV_TOKEN = 'CLUTCH_TOKEN'
ENV_TIMEOUT = 'CLUTCH_TIMEOUT'


@lru_cache(maxsize=1)
def get_config() -> VaultConfig:
    """
    Load client configuration.

    Settings come from data/vault_config.json when it exists, otherwise from
    schema defaults. CLUTCH_API_URL, CLUTCH_TOKEN and CLUTCH_TIMEOUT override
    the file. Configuration is cached after first load.

    Returns:
        VaultConfig object with validated settings

    Raises:
        ValueError: If the config file or an override has invalid values

    Example:
        from clutch_vault.config import get_config
        config = get_config()
        print(f"API: {config.api_url}")
    """
    settings = {}
    if CONFIG_PATH.exists():
        settings = load_json(CONFIG_PATH, schema=VaultConfig).model_dump()
    else:
        logger.debug(f'No config file at {CONFIG_PATH}, using defaults')

    if os.environ.get(ENV_API_URL):
        settings['api_url'] = os.environ[ENV_API_URL]
    if os.environ.get(ENV_TOKEN):
        settings['api_token'] = os.environ[ENV_TOKEN]
    if os.environ.get(ENV_TIMEOUT):
        settings['request_timeout'] = coerce_number(os.environ[ENV_TIMEOUT])

    return VaultConfig.model_validate(settings)


def get_api_url() -> str:
    """Get the API base URL from config."""
    return get_config().api_url


def get_max_workers() -> int:
    """Get the thread pool size for fan-out fetches."""
    return get_config().max_workers


def clear_config_cache() -> None:
    """
    Clear the configuration cache.

    Use this if the config file or environment changes at runtime.
    """
    get_config.cache_clear()
