"""
Structured field extraction from plain resume text.

Binary document decoding happens upstream; this module only sees the text
and pulls out contact details, skills, experience, education and the other
sections used for requirement matching.
"""
import logging
import re
from typing import Any, Dict, List, Optional, Sequence

logger = logging.getLogger(__name__)

SECTION_HEADINGS = (
    'experience', 'education', 'skills', 'summary', 'objective',
    'certifications', 'languages', 'projects', 'awards'
)

COMMON_SKILLS = [
    'JavaScript', 'Python', 'Java', 'React', 'Node.js', 'Angular', 'Vue.js',
    'HTML', 'CSS', 'TypeScript', 'PHP', 'Ruby', 'C#', 'C++', 'Go', 'Rust',
    'AWS', 'Azure', 'GCP', 'Docker', 'Kubernetes', 'Git', 'SQL', 'MongoDB',
    'PostgreSQL', 'MySQL', 'Redis', 'GraphQL', 'REST API', 'Machine Learning',
    'TensorFlow', 'PyTorch', 'Pandas', 'NumPy', 'Scikit-learn', 'Linux',
    'DevOps', 'CI/CD', 'Jenkins', 'Terraform', 'Ansible', 'Microservices'
]

COMMON_LANGUAGES = [
    'English', 'Spanish', 'French', 'German', 'Chinese', 'Japanese', 'Korean',
    'Portuguese', 'Italian', 'Russian', 'Arabic', 'Hindi', 'Dutch', 'Swedish'
]

NAME_PATTERN = re.compile(r'^([A-Z][a-z]+ )+[A-Z][a-z]+$')
EMAIL_PATTERN = re.compile(r'\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b')
PHONE_PATTERN = re.compile(r'\b(?:\+?1[-.]?)?\(?([0-9]{3})\)?[-.]?([0-9]{3})[-.]?([0-9]{4})\b')
ADDRESS_PATTERN = re.compile(
    r'\b\d+\s+[A-Za-z\s]+(?:Street|St|Avenue|Ave|Road|Rd|Lane|Ln|Drive|Dr|Boulevard|Blvd)\b[^\n]*',
    re.IGNORECASE
)
YEAR_PATTERN = re.compile(r'\b(?:19|20)\d{2}\b')
ONGOING_PATTERN = re.compile(r'\b(?:present|current|now)\b', re.IGNORECASE)
DEGREE_PATTERN = re.compile(r'\b(?:Bachelor|Master|PhD|Associate|Certificate)\b', re.IGNORECASE)


def _vocabulary_pattern(term: str) -> re.Pattern:
    return re.compile(r'(?<!\w)' + re.escape(term.lower()) + r'(?!\w)')


_SKILL_PATTERNS = [(skill, _vocabulary_pattern(skill)) for skill in COMMON_SKILLS]
_LANGUAGE_PATTERNS = [(lang, _vocabulary_pattern(lang)) for lang in COMMON_LANGUAGES]


def extract_section(text: str, section_keywords: Sequence[str]) -> Optional[str]:
    """
    Body of the first section whose heading matches one of the keywords.

    A section runs until the next line starting with a known heading or the
    end of the text. Original casing is preserved.

    Args:
        text: Resume text
        section_keywords: Heading keywords, tried in order

    Returns:
        Section text, or None if no keyword leads to a non-empty section
    """
    headings = '|'.join(SECTION_HEADINGS)
    for keyword in section_keywords:
        pattern = re.compile(
            r'\b' + re.escape(keyword) + r'\b\s*:?\s*([\s\S]*?)(?=\n\s*\b(?:' + headings + r')\b|\Z)',
            re.IGNORECASE
        )
        match = pattern.search(text)
        if match and match.group(1):
            return match.group(1).strip()
    return None


def _find_terms(section: Optional[str], patterns) -> List[str]:
    if not section:
        return []
    section_lower = section.lower()
    return [term for term, pattern in patterns if pattern.search(section_lower)]


def extract_name(text: str) -> Optional[str]:
    """First line of the resume if it looks like a capitalized full name."""
    lines = [line.strip() for line in text.split('\n') if line.strip()]
    if lines and NAME_PATTERN.match(lines[0]):
        return lines[0]
    return None


def extract_email(text: str) -> Optional[str]:
    match = EMAIL_PATTERN.search(text)
    return match.group(0) if match else None


def extract_phone(text: str) -> Optional[str]:
    match = PHONE_PATTERN.search(text)
    return match.group(0) if match else None


def extract_address(text: str) -> Optional[str]:
    match = ADDRESS_PATTERN.search(text)
    return match.group(0).strip() if match else None


def extract_skills(text: str) -> List[str]:
    section = extract_section(text, ['skills', 'technical skills', 'core competencies', 'technologies'])
    return _find_terms(section, _SKILL_PATTERNS)


def extract_experience(text: str) -> List[Dict[str, Any]]:
    """
    Split the experience section into entries.

    A line carrying a year opens a new entry: its first year is the start
    date, a second year or present/current/now the end date. The next short
    lines fill in company and then position.
    """
    section = extract_section(
        text, ['experience', 'work experience', 'employment', 'professional experience']
    )
    if not section:
        return []

    experiences = []
    current = None
    for line in (line for line in section.split('\n') if line.strip()):
        years = YEAR_PATTERN.findall(line)
        if years:
            if current:
                experiences.append(current)

            end_date = None
            if len(years) > 1:
                end_date = years[1]
            elif ONGOING_PATTERN.search(line):
                end_date = 'Present'

            current = {
                'company': '',
                'position': '',
                'start_date': years[0],
                'end_date': end_date,
                'description': line
            }
        elif current:
            if not current['company'] and len(line) < 50:
                current['company'] = line.strip()
            elif not current['position'] and len(line) < 50:
                current['position'] = line.strip()

    if current:
        experiences.append(current)

    return experiences


def extract_education(text: str) -> List[Dict[str, str]]:
    section = extract_section(text, ['education', 'academic background', 'qualifications'])
    if not section:
        return []

    education = []
    for line in section.split('\n'):
        if line.strip() and DEGREE_PATTERN.search(line):
            years = YEAR_PATTERN.findall(line)
            education.append({
                'degree': line.strip(),
                'institution': '',
                'field': '',
                'start_date': years[0] if len(years) > 1 else '',
                'end_date': years[-1] if years else ''
            })
    return education


def extract_certifications(text: str) -> List[str]:
    section = extract_section(text, ['certifications', 'certificates', 'licenses'])
    if not section:
        return []
    return [line.strip() for line in section.split('\n') if line.strip() and len(line) > 5]


def extract_languages(text: str) -> List[str]:
    return _find_terms(extract_section(text, ['languages']), _LANGUAGE_PATTERNS)


def extract_summary(text: str) -> Optional[str]:
    section = extract_section(text, ['summary', 'objective', 'profile', 'about'])
    if section:
        return section.split('\n')[0].strip()

    # Fall back to first paragraph
    paragraphs = [p for p in text.split('\n\n') if len(p.strip()) > 50]
    return paragraphs[0].strip() if paragraphs else None


def extract_resume_data(text: str) -> Dict[str, Any]:
    """
    Extract structured fields from resume text.

    Args:
        text: Plain resume text

    Returns:
        Dict with name, email, phone, address, skills, experience,
        education, certifications, languages and summary
    """
    text = text or ''
    data = {
        'name': extract_name(text),
        'email': extract_email(text),
        'phone': extract_phone(text),
        'address': extract_address(text),
        'skills': extract_skills(text),
        'experience': extract_experience(text),
        'education': extract_education(text),
        'certifications': extract_certifications(text),
        'languages': extract_languages(text),
        'summary': extract_summary(text)
    }
    logger.info(
        f"Extracted resume data: skills={len(data['skills'])}, "
        f"experience entries={len(data['experience'])}"
    )
    return data


def parse_resume_text(text: Optional[str]) -> Dict[str, Any]:
    """
    Validate decoded resume text and extract its structured data.

    Raises:
        ValueError: If the text is empty
    """
    if not text or not text.strip():
        raise ValueError("Failed to parse resume: no text extracted")
    return {
        'text': text.strip(),
        'extracted': extract_resume_data(text)
    }
