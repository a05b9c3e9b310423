"""
Evidence matching between a job's requirements and a parsed resume.

Matching runs in two passes. The first pass looks for each requirement in
the resume's listed skills, then in its sentences, and records everything
without evidence as missing. The second pass adds up years of experience
for the job's extracted "N years" requirements and clears those from the
missing list when the total is high enough.
"""
import logging
import re
from datetime import date
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

SENTENCE_SPLIT = re.compile(r'[.!?]+')
LEADING_INT = re.compile(r'\s*([+-]?\d+)')
DESCRIPTION_YEARS = re.compile(r'\b(\d+)\s*years?\b')
FIRST_NUMBER = re.compile(r'\d+')

DEFAULT_EVIDENCE_MAX_LENGTH = 200
DEFAULT_MIN_SENTENCE_LENGTH = 10


def _parse_year(value: Any) -> Optional[int]:
    """Leading integer of a date string ("2018", "2018-05"), else None."""
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if not isinstance(value, str):
        return None
    match = LEADING_INT.match(value)
    return int(match.group(1)) if match else None


def _truncate(text: str, max_length: int) -> str:
    if len(text) > max_length:
        return text[:max_length] + '...'
    return text


def find_skill_evidence(requirement: str, skills: List[str]) -> Optional[str]:
    """First listed skill contained in the requirement or containing it."""
    req_lower = requirement.lower()
    for skill in skills:
        if not skill or not skill.strip():
            continue
        skill_lower = skill.lower()
        if req_lower in skill_lower or skill_lower in req_lower:
            return f"Skill listed: {skill}"
    return None


def find_sentence_evidence(
    requirement: str,
    resume_text: str,
    max_length: int = DEFAULT_EVIDENCE_MAX_LENGTH,
    min_sentence_length: int = DEFAULT_MIN_SENTENCE_LENGTH
) -> Optional[str]:
    """
    First sentence of the (lowercased) resume text mentioning the requirement.

    Args:
        requirement: Requirement to look for
        resume_text: Resume text, already lowercased
        max_length: Evidence longer than this is cut and suffixed with "..."
        min_sentence_length: Sentences this short or shorter are ignored

    Returns:
        Evidence text, or None when no sentence qualifies
    """
    req_lower = requirement.lower()
    for sentence in SENTENCE_SPLIT.split(resume_text):
        if req_lower in sentence and len(sentence) > min_sentence_length:
            return _truncate(sentence.strip(), max_length)
    return None


def calculate_total_experience(
    experience: List[Dict[str, Any]],
    current_year: Optional[int] = None
) -> int:
    """
    Sum years of experience over structured experience entries.

    Entries with both dates count end year minus start year (never negative),
    with a "present" end date meaning the current year. Entries missing a
    date fall back to an "N years" mention in their description.

    Args:
        experience: Experience entries from the parsed resume
        current_year: Year used for "present"; defaults to today

    Returns:
        Total years
    """
    if current_year is None:
        current_year = date.today().year

    total = 0
    for entry in experience or []:
        start_date = entry.get('start_date')
        end_date = entry.get('end_date')
        if start_date and end_date:
            start_year = _parse_year(start_date)
            if isinstance(end_date, str) and 'present' in end_date.lower():
                end_year = current_year
            else:
                end_year = _parse_year(end_date)
            if start_year and end_year:
                total += max(0, end_year - start_year)
        elif entry.get('description'):
            match = DESCRIPTION_YEARS.search(entry['description'])
            if match:
                total += int(match.group(1))
    return total


def is_experience_requirement(requirement: str) -> bool:
    return 'years' in requirement or 'experience' in requirement


def match_resume_to_job(
    job: Dict[str, Any],
    resume: Dict[str, Any],
    evidence_max_length: int = DEFAULT_EVIDENCE_MAX_LENGTH,
    min_sentence_length: int = DEFAULT_MIN_SENTENCE_LENGTH,
    current_year: Optional[int] = None
) -> Dict[str, Any]:
    """
    Collect evidence for each job requirement from a resume.

    Args:
        job: Job with ``requirements`` (extracted) and ``skills_required``
        resume: Resume with ``parsed_content`` and ``extracted_data``
            (``skills``, ``experience``)
        evidence_max_length: Maximum evidence sentence length
        min_sentence_length: Minimum sentence length for text evidence
        current_year: Year used for "present" end dates

    Returns:
        {"evidence": {requirement: text}, "missing_requirements": [...]}
    """
    evidence: Dict[str, str] = {}
    missing_requirements: List[str] = []

    job_requirements = job.get('requirements') or []
    all_requirements = list(job_requirements) + list(job.get('skills_required') or [])

    resume_text = (resume.get('parsed_content') or '').lower()
    extracted = resume.get('extracted_data') or {}
    resume_skills = extracted.get('skills') or []
    resume_experience = extracted.get('experience') or []

    for requirement in all_requirements:
        evidence_text = find_skill_evidence(requirement, resume_skills)
        if evidence_text is None:
            evidence_text = find_sentence_evidence(
                requirement, resume_text, evidence_max_length, min_sentence_length
            )

        if evidence_text is not None:
            evidence[requirement] = evidence_text
        else:
            missing_requirements.append(requirement)

    total_experience = None
    for requirement in job_requirements:
        if not is_experience_requirement(requirement):
            continue
        years_match = FIRST_NUMBER.search(requirement)
        if not years_match:
            continue

        if total_experience is None:
            total_experience = calculate_total_experience(resume_experience, current_year)

        if total_experience >= int(years_match.group(0)):
            evidence[requirement] = f"{total_experience} years total experience found"
            if requirement in missing_requirements:
                missing_requirements.remove(requirement)

    logger.debug(
        f"Matched {len(evidence)} requirements, {len(missing_requirements)} missing "
        f"for resume {resume.get('id')}"
    )
    return {
        'evidence': evidence,
        'missing_requirements': missing_requirements
    }
