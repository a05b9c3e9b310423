"""
Request validation helpers.
"""
from typing import Any, Dict, List, Tuple


RESUME_STATUS_PROCESSING = 'processing'
RESUME_STATUS_PROCESSED = 'processed'
RESUME_STATUS_FAILED = 'failed'


def validate_top_n(top_n: Any, config: Any) -> Tuple[bool, str]:
    """
    Validate the number of matches requested from the ranker.

    Args:
        top_n: Requested number of matches
        config: Configuration object

    Returns:
        Tuple of (is_valid, error_message)
    """
    if isinstance(top_n, bool) or not isinstance(top_n, int):
        return False, "top_n must be an integer"

    if top_n < 1 or top_n > config.max_top_n:
        return False, f"top_n must be between 1 and {config.max_top_n}"

    return True, ""


def validate_search_request(query: Any, k: Any, config: Any) -> Tuple[bool, str]:
    """
    Validate a snippet search request.

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not isinstance(query, str) or len(query.strip()) < 2:
        return False, "Query must be provided"

    if isinstance(k, bool) or not isinstance(k, int):
        return False, "k must be an integer"

    if k < 1 or k > config.max_search_results:
        return False, f"k must be 1-{config.max_search_results}"

    return True, ""


def is_rankable(resume: Dict[str, Any]) -> bool:
    """A resume can be ranked only once it is processed, with text and an embedding."""
    if resume.get('status') != RESUME_STATUS_PROCESSED:
        return False
    if not resume.get('parsed_content'):
        return False
    embedding = resume.get('embedding')
    return embedding is not None and len(embedding) > 0


def select_rankable_resumes(resumes: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Drop resumes that are still processing, failed, or lack text/embedding."""
    return [resume for resume in resumes if is_rankable(resume)]
