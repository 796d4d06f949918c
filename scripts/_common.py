"""Shared helpers for command-line scripts."""
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

from loguru import logger

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from catplants.utils.config_manager import ConfigManager

DEFAULT_CONFIG_PATH = Path("config/catplants.yaml")


def setup_logging(name: str, log_file: Optional[Path] = None, verbose: bool = False):
    """Configure console and rotating file logging."""
    logger.remove()  # Remove default handler

    logger.add(
        sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <level>{message}</level>",
        level="DEBUG" if verbose else "INFO",
    )

    if log_file is None:
        log_file = Path("logs") / f"{name}_{datetime.now():%Y%m%d_%H%M%S}.log"

    log_file.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        log_file,
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} | {message}",
        level="DEBUG",
        rotation="10 MB",
    )

    logger.info(f"Logging to {log_file}")


def load_config(path: Optional[str]) -> ConfigManager:
    """Load configuration from ``path``; an explicit path must exist."""
    if path:
        manager = ConfigManager(Path(path))
    elif DEFAULT_CONFIG_PATH.exists():
        manager = ConfigManager(DEFAULT_CONFIG_PATH)
    else:
        manager = ConfigManager()

    errors = manager.validate_config()
    if errors:
        for error in errors:
            logger.error(f"Config: {error}")
        raise SystemExit(2)
    return manager
