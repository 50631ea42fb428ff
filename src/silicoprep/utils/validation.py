"""Parameter and file validation utilities for silicoprep."""

import logging
from pathlib import Path
from typing import List

from silicoprep.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


def validate_file_exists(filepath: str, description: str = "File") -> None:
    """
    Validate that a file exists.

    Args:
        filepath: Path to check
        description: Description for error message

    Raises:
        FileNotFoundError: If file doesn't exist
    """
    if not Path(filepath).exists():
        raise FileNotFoundError(f"{description} not found: {filepath}")


def require_valid(problems: List[str], what: str = "configuration") -> None:
    """
    Raise if a validate() call reported any problem.

    Args:
        problems: Messages returned by a config's validate()
        what: Name used in the error message

    Raises:
        ConfigurationError: If problems is not empty
    """
    if problems:
        for problem in problems:
            logger.error(f"Invalid {what}: {problem}")
        raise ConfigurationError(f"Invalid {what}: " + "; ".join(problems))
