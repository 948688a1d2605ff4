"""
Utility functions for configuration and logging.
"""

import os
import logging
import yaml
from pathlib import Path
from typing import Dict, Any
from dotenv import load_dotenv, find_dotenv


def load_config(config_path: str = "config.yaml") -> Dict[str, Any]:
    """
    Load configuration from a YAML file.

    Environment variables are loaded from the project-local .env first so
    `${VAR}` placeholders in the YAML resolve to the values the developer
    edits.

    Args:
        config_path: Path to config file

    Returns:
        Configuration dictionary
    """
    project_root = Path(__file__).resolve().parent.parent.parent
    explicit_env = project_root / ".env"
    dotenv_loaded = False

    if explicit_env.exists():
        load_dotenv(explicit_env, override=True)
        dotenv_loaded = True

    if not dotenv_loaded:
        env_path = find_dotenv(usecwd=True)
        if env_path:
            load_dotenv(env_path, override=True)
            dotenv_loaded = True

    if not dotenv_loaded:
        load_dotenv(override=False)

    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r') as f:
        config = yaml.safe_load(f) or {}

    return _expand_env_vars(config)


def _expand_env_vars(config: Any) -> Any:
    """
    Recursively expand environment variables in config.

    Only whole-string `${VAR}` placeholders are replaced. Unset variables
    leave the placeholder untouched so validation can report them.
    """
    if isinstance(config, dict):
        return {k: _expand_env_vars(v) for k, v in config.items()}
    elif isinstance(config, list):
        return [_expand_env_vars(item) for item in config]
    elif isinstance(config, str):
        if config.startswith('${') and config.endswith('}'):
            var_name = config[2:-1]
            return os.getenv(var_name, config)
        return config
    else:
        return config


def setup_logging(config: Dict[str, Any]):
    """
    Setup logging configuration.

    Args:
        config: Configuration dictionary
    """
    log_level = str(config.get('logging', {}).get('level', 'INFO')).upper()
    log_file = config.get('logging', {}).get('file')

    handlers = [logging.StreamHandler()]
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers,
    )

    # Reduce noise from some libraries
    logging.getLogger('urllib3').setLevel(logging.WARNING)
    logging.getLogger('opentelemetry').setLevel(logging.WARNING)
