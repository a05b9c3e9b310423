"""
Cosine similarity between stored embeddings.
"""
import logging
from typing import Optional, Sequence, Union
import numpy as np
from sklearn.metrics.pairwise import cosine_similarity

logger = logging.getLogger(__name__)

EmbeddingLike = Union[np.ndarray, Sequence[float]]


def calculate_similarity(
    embedding1: Optional[EmbeddingLike],
    embedding2: Optional[EmbeddingLike]
) -> float:
    """
    Compute cosine similarity between embeddings, clamped to [0, 1].

    Missing or non-numeric embeddings, mismatched dimensions and zero vectors all score 0
    rather than raising; opposite vectors score 0 as well.

    Args:
        embedding1: First embedding (array or list of floats)
        embedding2: Second embedding

    Returns:
        Similarity in [0, 1]
    """
    if embedding1 is None or embedding2 is None:
        return 0.0

    try:
        vec1 = np.asarray(embedding1, dtype=np.float64).ravel()
        vec2 = np.asarray(embedding2, dtype=np.float64).ravel()
    except (TypeError, ValueError) as e:
        logger.debug(f"Unusable embedding: {str(e)}")
        return 0.0

    if vec1.shape != vec2.shape:
        logger.debug(f"Embedding dimension mismatch: {vec1.size} vs {vec2.size}")
        return 0.0

    if not (np.all(np.isfinite(vec1)) and np.all(np.isfinite(vec2))):
        return 0.0

    if np.linalg.norm(vec1) == 0 or np.linalg.norm(vec2) == 0:
        return 0.0

    sim = cosine_similarity(vec1.reshape(1, -1), vec2.reshape(1, -1))[0][0]
    return max(0.0, min(1.0, float(sim)))
