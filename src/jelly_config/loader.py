import logging
from pathlib import Path
from typing import Optional, Union

from .core.config import Config
from .errors import ConfigError, ParseError
from .parsing.parser import parse
from .settings import ParserSettings

logger = logging.getLogger(__name__)


def load(path: Union[str, Path], settings: Optional[ParserSettings] = None,
         encoding: str = 'utf-8') -> Config:
    """Read and parse a config file"""
    path = Path(path)
    try:
        logger.debug(f"Loading config file: {path}")
        content = path.read_text(encoding=encoding)
    except UnicodeDecodeError:
        logger.debug(f"Retrying with latin1 encoding: {path}")
        content = path.read_text(encoding='latin1')
    except OSError as e:
        logger.error(f"Failed to read file {path}: {e}")
        raise ConfigError(f"Failed to read file {path}: {e}") from e

    try:
        config = parse(content, settings)
    except ParseError as e:
        e.path = path
        raise

    logger.debug(f"Loaded {len(config)} keys from {path}")
    return config
