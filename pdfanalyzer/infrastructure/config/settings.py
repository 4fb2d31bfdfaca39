"""Provides loading of the process-wide configuration.

Supports loading from .env files, environment variables, and a dedicated
configuration file (~/.pdfanalyzer/config.yaml). The result is an immutable
AppSettings value built once at startup and passed explicitly to the
components that need it.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml
from dotenv import dotenv_values

from pdfanalyzer.domain.errors import ConfigurationError
from pdfanalyzer.domain.models.common import ApiKey, ModelId
from pdfanalyzer.infrastructure.ai.gemini.gemini_models import DEFAULT_MODEL

logger = logging.getLogger(__name__)

# --- Configuration Constants ---
DEFAULT_CONFIG_DIR = Path.home() / ".pdfanalyzer"
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.yaml"
ENV_FILE_NAME = ".env"
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Setting name -> (environment variable, dotted YAML key)
_SOURCES = {
    "api_key": ("GEMINI_API_KEY", "gemini.api_key"),
    "default_model": ("GEMINI_MODEL", "gemini.model"),
    "log_level": ("PDFANALYZER_LOG_LEVEL", "logging.level"),
    "log_file": ("PDFANALYZER_LOG_FILE", "logging.file"),
    "log_format": ("PDFANALYZER_LOG_FORMAT", "logging.format"),
    "request_timeout": ("PDFANALYZER_HTTP_TIMEOUT", "http.timeout_seconds"),
}


@dataclass(frozen=True)
class AppSettings:
    """Read-only configuration shared by every invocation."""
    api_key: ApiKey
    default_model: ModelId = ModelId(DEFAULT_MODEL)
    log_level: str = DEFAULT_LOG_LEVEL
    log_file: Optional[str] = None
    log_format: str = DEFAULT_LOG_FORMAT
    request_timeout: Optional[float] = None  # None: transport default

    def __repr__(self) -> str:
        # Keep the key out of logs and tracebacks
        return (
            f"AppSettings(api_key='***', default_model={self.default_model!r}, "
            f"log_level={self.log_level!r}, log_file={self.log_file!r}, "
            f"request_timeout={self.request_timeout!r})"
        )


def load_settings(
    config_file: Optional[Path] = None,
    env_file: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> AppSettings:
    """Builds AppSettings from the environment, a .env file and YAML.

    Priority order (highest to lowest):
    1. Environment Variables
    2. .env file
    3. YAML configuration file
    4. Default values

    Args:
        config_file: Path to the YAML configuration file.
        env_file: Path to the .env file (searches upwards from cwd if None).
        environ: Environment mapping; ``os.environ`` if None.

    Raises:
        ConfigurationError: If the API key is missing or a value is invalid.
    """
    yaml_config = _load_yaml(config_file or DEFAULT_CONFIG_FILE)

    env_values: Dict[str, Optional[str]] = {}
    dotenv_path = env_file or find_dotenv_path()
    if dotenv_path and Path(dotenv_path).is_file():
        env_values.update(dotenv_values(dotenv_path))
        logger.info(f"Loaded environment variables from: {dotenv_path}")
    env_values.update(os.environ if environ is None else environ)

    def lookup(name: str) -> Any:
        env_key, yaml_key = _SOURCES[name]
        value = env_values.get(env_key)
        if value is not None and str(value).strip() != "":
            return str(value).strip()
        value = _lookup_dotted(yaml_config, yaml_key)
        if value is not None and str(value).strip() != "":
            return value
        return None

    api_key = lookup("api_key")
    if not api_key:
        raise ConfigurationError("GEMINI_API_KEY environment variable is not set!", config_key="GEMINI_API_KEY")

    settings = AppSettings(
        api_key=ApiKey(str(api_key)),
        default_model=ModelId(str(lookup("default_model") or DEFAULT_MODEL)),
        log_level=str(lookup("log_level") or DEFAULT_LOG_LEVEL).upper(),
        log_file=_optional_str(lookup("log_file")),
        log_format=str(lookup("log_format") or DEFAULT_LOG_FORMAT),
        request_timeout=_parse_timeout(lookup("request_timeout")),
    )
    logger.debug(f"Configuration loaded: {settings}")
    return settings


def find_dotenv_path() -> Optional[Path]:
    """Searches for the .env file upwards from the current directory."""
    cwd = Path.cwd()
    for path in [cwd] + list(cwd.parents):
        env_path = path / ENV_FILE_NAME
        if env_path.is_file():
            return env_path
    return None


def _load_yaml(config_file: Path) -> Dict[str, Any]:
    if not config_file.is_file():
        logger.debug(f"YAML config file not found: {config_file}")
        return {}
    try:
        with open(config_file, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Failed to load or parse YAML config {config_file}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"YAML config file {config_file} did not contain a mapping.")
    logger.info(f"Loaded configuration from YAML: {config_file}")
    return data


def _lookup_dotted(tree: Mapping[str, Any], dotted_key: str) -> Any:
    """Reads ``a.b.c`` from nested mappings."""
    node: Any = tree
    for part in dotted_key.split("."):
        if not isinstance(node, Mapping) or part not in node:
            return None
        node = node[part]
    return node


def _optional_str(value: Any) -> Optional[str]:
    return str(value) if value is not None else None


def _parse_timeout(value: Any) -> Optional[float]:
    if value is None:
        return None
    try:
        timeout = float(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid HTTP timeout '{value}': expected seconds", config_key="http.timeout_seconds") from e
    if timeout <= 0:
        raise ConfigurationError(f"Invalid HTTP timeout '{value}': must be positive", config_key="http.timeout_seconds")
    return timeout
