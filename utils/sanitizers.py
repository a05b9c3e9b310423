"""
Input sanitization and PII redaction utilities.
"""
import copy
import re
import os
from typing import Any, Dict

REDACTED = '[REDACTED]'

PII_FIELDS = ('email', 'phone', 'address', 'name')


def sanitize_filename(filename: str) -> str:
    """
    Sanitize filename to prevent path traversal and injections.

    Args:
        filename: Original filename

    Returns:
        Sanitized filename
    """
    # Get base name only (remove any path components)
    filename = os.path.basename(filename or '')

    filename = re.sub(r'[^\w\s\-\.]', '', filename)
    filename = filename.strip('. ')

    if len(filename) > 100:
        name, ext = os.path.splitext(filename)
        filename = name[:90] + ext

    if not filename:
        filename = "unnamed_resume.txt"

    return filename


def to_safe_dict(resume: Dict[str, Any], is_recruiter: bool = False) -> Dict[str, Any]:
    """
    Serialize a resume record, redacting PII for non-recruiters.

    The embedding is dropped from the copy: callers get the scores derived
    from it, not the raw vector.

    Args:
        resume: Resume record
        is_recruiter: Recruiters see the full extracted data

    Returns:
        A new dict; the input record is never modified
    """
    safe = copy.deepcopy(resume)
    safe.pop('embedding', None)

    extracted = safe.get('extracted_data')
    if is_recruiter or not extracted:
        return safe

    for field in PII_FIELDS:
        if extracted.get(field):
            extracted[field] = REDACTED

    if extracted.get('experience'):
        extracted['experience'] = [
            {**exp, 'description': REDACTED if exp.get('description') else exp.get('description')}
            for exp in extracted['experience']
        ]

    return safe
