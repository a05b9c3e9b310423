"""
Candidate ranking for a job.

Each candidate's score blends embedding similarity with the share of job
requirements that have evidence in the resume.
"""
import logging
from typing import Any, Callable, Dict, List, Optional

from .matcher import match_resume_to_job
from .similarity import calculate_similarity
from utils.sanitizers import to_safe_dict

logger = logging.getLogger(__name__)

SIMILARITY_WEIGHT = 0.7
REQUIREMENTS_WEIGHT = 0.3


def _full_record(resume: Dict[str, Any]) -> Dict[str, Any]:
    # Ranking is a recruiter view, so nothing is redacted
    return to_safe_dict(resume, is_recruiter=True)


def compute_match_ratio(job: Dict[str, Any], evidence: Dict[str, str]) -> float:
    """Matched requirements over declared plus extracted requirements."""
    total = len(job.get('requirements') or []) + len(job.get('skills_required') or [])
    if total == 0:
        return 0.0
    return len(evidence) / total


def score_candidate(
    candidate: Dict[str, Any],
    job: Dict[str, Any],
    similarity_weight: float = SIMILARITY_WEIGHT,
    requirements_weight: float = REQUIREMENTS_WEIGHT,
    serializer: Optional[Callable[[Dict[str, Any]], Dict[str, Any]]] = None,
    **match_options: Any
) -> Dict[str, Any]:
    """Score one candidate against a job and attach the evidence."""
    serializer = serializer or _full_record

    similarity = calculate_similarity(job.get('embedding'), candidate.get('embedding'))
    analysis = match_resume_to_job(job, candidate, **match_options)
    match_ratio = compute_match_ratio(job, analysis['evidence'])
    score = similarity * similarity_weight + match_ratio * requirements_weight

    return {
        **serializer(candidate),
        'resume_id': candidate.get('id'),
        'score': score,
        'similarity': similarity,
        'match_ratio': match_ratio,
        'evidence': analysis['evidence'],
        'missing_requirements': analysis['missing_requirements']
    }


def rank_candidates(
    candidates: List[Dict[str, Any]],
    job: Dict[str, Any],
    top_n: Optional[int] = None,
    similarity_weight: float = SIMILARITY_WEIGHT,
    requirements_weight: float = REQUIREMENTS_WEIGHT,
    serializer: Optional[Callable[[Dict[str, Any]], Dict[str, Any]]] = None,
    **match_options: Any
) -> List[Dict[str, Any]]:
    """
    Rank candidates for a job, best first.

    Ties keep their input order. ``top_n`` is expected to be validated by the
    caller; None returns every candidate.

    Args:
        candidates: Resume records with ``embedding`` and ``extracted_data``
        job: Job record with ``embedding``, ``requirements``, ``skills_required``
        top_n: Maximum number of results
        similarity_weight: Weight of the embedding similarity
        requirements_weight: Weight of the requirement match ratio
        serializer: Turns a resume into the dict returned to the caller
        **match_options: Passed through to match_resume_to_job

    Returns:
        List of match results sorted by descending score
    """
    results = [
        score_candidate(
            candidate, job, similarity_weight, requirements_weight,
            serializer, **match_options
        )
        for candidate in candidates
    ]

    # list.sort is stable, so equal scores keep their input order
    results.sort(key=lambda x: x['score'], reverse=True)

    if top_n is not None:
        results = results[:top_n]

    if results:
        logger.info(
            f"Ranked {len(candidates)} candidates for job {job.get('id')}, "
            f"top score {results[0]['score']:.3f}"
        )
    return results
