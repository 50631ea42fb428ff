"""Utility modules for silicoprep."""

from silicoprep.utils.logging_utils import get_logger, setup_logger
from silicoprep.utils.validation import require_valid, validate_file_exists
