"""Utility modules."""
from .config import Config
from .logging_config import setup_logging
from .sanitizers import sanitize_filename, to_safe_dict
from .validators import (
    validate_top_n,
    validate_search_request,
    select_rankable_resumes
)

__all__ = [
    'Config',
    'setup_logging',
    'sanitize_filename',
    'to_safe_dict',
    'validate_top_n',
    'validate_search_request',
    'select_rankable_resumes'
]
