"""
Config-bound scoring facade.

Ties the requirement extractor, evidence matcher and ranker to one
configuration so callers do not have to thread weights and limits through
every call.
"""
import logging
from typing import Any, Callable, Dict, List, Optional

from .matcher import match_resume_to_job
from .ranker import rank_candidates
from .requirements import extract_job_requirements
from .similarity import calculate_similarity

logger = logging.getLogger(__name__)


class MatchScorer:
    """
    Score resumes against jobs:
    1. Embedding similarity
    2. Requirement evidence (skills, sentences, years of experience)
    3. Weighted blend of both for ranking
    """

    def __init__(self, config):
        self.config = config
        self.weights = {
            'semantic_similarity': config.similarity_weight,
            'requirements_match': config.requirements_weight
        }

    def extract_requirements(self, job_description: str) -> List[str]:
        return extract_job_requirements(job_description)

    def compute_semantic_similarity(self, embedding1, embedding2) -> float:
        return calculate_similarity(embedding1, embedding2)

    def match_resume(
        self,
        job: Dict[str, Any],
        resume: Dict[str, Any],
        current_year: Optional[int] = None
    ) -> Dict[str, Any]:
        """Evidence and missing requirements for one resume."""
        return match_resume_to_job(
            job,
            resume,
            evidence_max_length=self.config.evidence_max_length,
            min_sentence_length=self.config.min_sentence_length,
            current_year=current_year
        )

    def rank_candidates(
        self,
        candidates: List[Dict[str, Any]],
        job: Dict[str, Any],
        top_n: Optional[int] = None,
        serializer: Optional[Callable[[Dict[str, Any]], Dict[str, Any]]] = None,
        current_year: Optional[int] = None
    ) -> List[Dict[str, Any]]:
        """
        Rank candidates with the configured weights.

        Args:
            candidates: Rankable resume records
            job: Job record
            top_n: Maximum number of results, None for all
            serializer: Resume serialization for the results
            current_year: Year used for "present" end dates

        Returns:
            Match results sorted by descending score
        """
        return rank_candidates(
            candidates,
            job,
            top_n=top_n,
            similarity_weight=self.weights['semantic_similarity'],
            requirements_weight=self.weights['requirements_match'],
            serializer=serializer,
            evidence_max_length=self.config.evidence_max_length,
            min_sentence_length=self.config.min_sentence_length,
            current_year=current_year
        )
