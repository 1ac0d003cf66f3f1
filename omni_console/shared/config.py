import json
from pathlib import Path
from typing import Dict, Any

from pydantic_settings import BaseSettings, SettingsConfigDict

from omni_console.const import (
    CONFIG_FILE_NAME,
    DEFAULT_BENCH_DIR,
    DEFAULT_LOG_LEVEL,
    DEFAULT_MODELS_FILE,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_SERVER_HOST,
    DEFAULT_SERVER_PORT,
    DEFAULT_SETTINGS_FILE,
    DEFAULT_SYSTEM_PROMPT,
    LIBRARY_LOG_LEVELS,
    PROBE_PROMPT,
)


class Config(BaseSettings):
    """Global configuration settings for the Omni Console."""

    settings_path: Path = Path(DEFAULT_SETTINGS_FILE)
    models_path: Path = Path(DEFAULT_MODELS_FILE)
    bench_dir: Path = Path(DEFAULT_BENCH_DIR)
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    probe_prompt: str = PROBE_PROMPT
    system_prompt: str = DEFAULT_SYSTEM_PROMPT
    google_api_key: str = ""
    server_host: str = DEFAULT_SERVER_HOST
    server_port: int = DEFAULT_SERVER_PORT
    log_level: str = DEFAULT_LOG_LEVEL
    library_log_levels: Dict[str, str] = dict(LIBRARY_LOG_LEVELS)

    model_config = SettingsConfigDict(
        env_prefix='OMNI_CONSOLE_',
    )

    @classmethod
    def load_config_from_json(cls) -> Dict[str, Any]:
        """Load configuration from config.json file."""
        config_path = Path(CONFIG_FILE_NAME)
        if config_path.exists():
            with open(config_path, 'r') as f:
                config = json.load(f)
                for key in ("settings_path", "models_path", "bench_dir"):
                    if key in config:
                        config[key] = Path(config[key])
                return config
        return {}

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        """
        Customise the sources for settings.

        Order of precedence (highest to lowest):
        1. Environment variables
        2. Init settings (kwargs passed to constructor)
        3. JSON config file
        4. Default values
        """
        def json_source():
            return cls.load_config_from_json()

        return (
            env_settings,
            init_settings,
            json_source,
        )
