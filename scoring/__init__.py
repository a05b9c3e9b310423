"""Similarity, requirement evidence and candidate ranking."""
from .similarity import calculate_similarity
from .requirements import extract_job_requirements
from .matcher import match_resume_to_job, calculate_total_experience
from .ranker import rank_candidates
from .scorer import MatchScorer
from .search import search_resumes, get_relevant_snippets, extract_top_keywords

__all__ = [
    'calculate_similarity',
    'extract_job_requirements',
    'match_resume_to_job',
    'calculate_total_experience',
    'rank_candidates',
    'MatchScorer',
    'search_resumes',
    'get_relevant_snippets',
    'extract_top_keywords'
]
