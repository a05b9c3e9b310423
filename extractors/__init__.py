"""Resume text extraction."""
from .resume_parser import extract_resume_data, extract_section, parse_resume_text

__all__ = [
    'extract_resume_data',
    'extract_section',
    'parse_resume_text'
]
