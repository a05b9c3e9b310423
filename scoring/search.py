"""
Keyword search over processed resume text and TF-IDF keyword summaries.
"""
import logging
import re
from typing import Any, Dict, List

from sklearn.feature_extraction.text import TfidfVectorizer

from utils.validators import RESUME_STATUS_PROCESSED

logger = logging.getLogger(__name__)

SNIPPET_SPLIT = re.compile(r'[\r\n.!?]+')


def get_relevant_snippets(text: str, query: str, k: int) -> List[str]:
    """
    Sentences of ``text`` containing ``query``, longest first.

    Args:
        text: Resume text
        query: Case-insensitive search phrase
        k: Maximum number of snippets

    Returns:
        Up to k snippets
    """
    if not text or not query:
        return []

    q = query.lower()
    sentences = [s.strip() for s in SNIPPET_SPLIT.split(text)]
    matched = [s for s in sentences if s and q in s.lower()]
    matched.sort(key=len, reverse=True)
    return matched[:k]


def search_resumes(
    resumes: List[Dict[str, Any]],
    query: str,
    k: int = 5
) -> List[Dict[str, Any]]:
    """
    Find resumes mentioning ``query`` and return their best snippet.

    Resumes that are not processed are skipped. The score grows with the
    number of matching snippets, from 0.8 up to 1.0 at k snippets.

    Returns:
        Up to k results sorted by descending score
    """
    results = []
    for resume in resumes:
        if resume.get('status') != RESUME_STATUS_PROCESSED:
            continue
        snippets = get_relevant_snippets(resume.get('parsed_content'), query, k)
        if snippets:
            results.append({
                'resume_id': resume.get('id'),
                'snippet': snippets[0],
                'score': 0.8 + (len(snippets) / k) * 0.2
            })

    results.sort(key=lambda x: x['score'], reverse=True)
    logger.info(f"Query '{query}' matched {len(results)} resumes")
    return results[:k]


def extract_top_keywords(text: str, n_keywords: int = 5) -> List[str]:
    """Extract top keywords using TF-IDF."""
    if n_keywords <= 0 or not text or not text.strip():
        return []

    try:
        vectorizer = TfidfVectorizer(
            max_features=5000,
            stop_words='english',
            ngram_range=(1, 2),
            min_df=1
        )
        tfidf_matrix = vectorizer.fit_transform([text])
    except ValueError as e:
        # Raised when nothing but stop words is left
        logger.warning(f"TF-IDF extraction failed: {str(e)}")
        return []

    feature_names = vectorizer.get_feature_names_out()
    tfidf_scores = tfidf_matrix.toarray()[0]
    top_indices = tfidf_scores.argsort()[-n_keywords:][::-1]
    return [str(feature_names[i]) for i in top_indices if tfidf_scores[i] > 0]
