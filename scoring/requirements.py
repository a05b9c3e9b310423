"""
Requirement extraction from job descriptions.

A job's requirements are canonical skill names, one "<N>+ years experience"
entry and seniority keywords, in that order, without duplicates.
"""
import logging
import re
from typing import List, Optional, Tuple

logger = logging.getLogger(__name__)


def _skill(pattern: str, name: str) -> Tuple[re.Pattern, str]:
    # Lookarounds instead of \b so names ending in symbols (C#, C++) still match.
    # ASCII word characters only, so accented letters count as boundaries.
    return re.compile(r'(?<!\w)(?:' + pattern + r')(?!\w)', re.ASCII), name


SKILL_PATTERNS: List[Tuple[re.Pattern, str]] = [
    _skill(r'javascript|js', 'JavaScript'),
    _skill(r'typescript|ts', 'TypeScript'),
    _skill(r'react', 'React'),
    _skill(r'node\.?js', 'Node.js'),
    _skill(r'python', 'Python'),
    _skill(r'java', 'Java'),
    _skill(r'c#', 'C#'),
    _skill(r'c\+\+', 'C++'),
    _skill(r'html', 'HTML'),
    _skill(r'css', 'CSS'),
    _skill(r'sql', 'SQL'),
    _skill(r'mongodb', 'MongoDB'),
    _skill(r'postgresql', 'PostgreSQL'),
    _skill(r'mysql', 'MySQL'),
    _skill(r'aws', 'AWS'),
    _skill(r'azure', 'Azure'),
    _skill(r'gcp', 'GCP'),
    _skill(r'docker', 'Docker'),
    _skill(r'kubernetes', 'Kubernetes'),
    _skill(r'git', 'Git'),
    _skill(r'linux', 'Linux'),
    _skill(r'machine learning', 'Machine Learning'),
    _skill(r'deep learning', 'Deep Learning'),
    _skill(r'ai', 'AI'),
    _skill(r'devops', 'DevOps'),
    _skill(r'ci/cd', 'CI/CD'),
    _skill(r'microservices', 'Microservices'),
    _skill(r'api', 'API'),
    _skill(r'rest', 'REST'),
    _skill(r'graphql', 'GraphQL'),
]

YEARS_EXPERIENCE_PATTERN = re.compile(r'\b(\d+)\+?\s*years?\s*(?:of\s*)?experience\b', re.ASCII)

LEVEL_PATTERNS: List[Tuple[re.Pattern, str]] = [
    (re.compile(r'\bsenior\b', re.ASCII), 'Senior'),
    (re.compile(r'\bjunior\b', re.ASCII), 'Junior'),
    (re.compile(r'\blead\b', re.ASCII), 'Lead'),
    (re.compile(r'\bmanager\b', re.ASCII), 'Manager'),
]


def extract_job_requirements(description: Optional[str]) -> List[str]:
    """
    Extract canonical requirements from a job description.

    Args:
        description: Job description text

    Returns:
        Deduplicated requirements in first-encountered order
    """
    if not description:
        return []

    text = description.lower()
    requirements = []

    for pattern, name in SKILL_PATTERNS:
        if pattern.search(text):
            requirements.append(name)

    # Only the first years-of-experience phrase counts
    match = YEARS_EXPERIENCE_PATTERN.search(text)
    if match:
        requirements.append(f"{match.group(1)}+ years experience")

    for pattern, level in LEVEL_PATTERNS:
        if pattern.search(text):
            requirements.append(level)

    unique = list(dict.fromkeys(requirements))
    logger.debug(f"Extracted {len(unique)} requirements: {unique}")
    return unique
