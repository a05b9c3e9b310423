"""
Text embedding module.

The default backend is a deterministic hashed bag-of-tokens embedder: the
same text always maps to the same 384-dim unit vector, and vectors produced
by any process sharing the hash function are directly comparable. A
sentence-transformers backend can be swapped in behind the same interface.
"""
import logging
import time
from typing import Dict, Iterator, List, Optional, Sequence
import numpy as np

from .tokenizer import normalize_tokens

logger = logging.getLogger(__name__)

try:
    from sentence_transformers import SentenceTransformer
    SENTENCE_TRANSFORMERS_AVAILABLE = True
except ImportError:
    SENTENCE_TRANSFORMERS_AVAILABLE = False
    logger.debug("sentence-transformers not available, hashing backend only")


EMBEDDING_DIMENSION = 384

# Hand-tuned signal patterns for common technical terms
TECH_TERM_PATTERNS: Dict[str, Sequence[int]] = {
    'javascript': (1, 0, 1, 0, 1),
    'python': (0, 1, 0, 1, 0),
    'react': (1, 1, 0, 0, 1),
    'node': (0, 0, 1, 1, 0),
    'aws': (1, 0, 0, 1, 1),
    'docker': (0, 1, 1, 0, 0),
    'kubernetes': (1, 1, 1, 0, 0),
    'machine': (0, 0, 0, 1, 1),
    'learning': (1, 0, 1, 1, 0),
    'database': (0, 1, 0, 0, 1),
    'api': (1, 1, 0, 1, 0),
    'frontend': (1, 0, 1, 0, 0),
    'backend': (0, 1, 0, 1, 1),
    'fullstack': (1, 1, 1, 1, 1),
}

TECH_TERM_WEIGHT = 0.5
TECH_TERM_STRIDE = 77
TOKEN_WEIGHT = 0.3
TOKEN_MULTIPLIERS = (1, 31, 37)


def _utf16_code_units(value: str) -> Iterator[int]:
    for char in value:
        code_point = ord(char)
        if code_point > 0xFFFF:
            code_point -= 0x10000
            yield 0xD800 + (code_point >> 10)
            yield 0xDC00 + (code_point & 0x3FF)
        else:
            yield code_point


def string_hash(value: str) -> int:
    """
    32-bit rolling string hash (h = h * 31 + code unit).

    The accumulator wraps to a signed 32-bit integer after every step and
    the absolute value is returned, so -2**31 comes back as 2**31. Stored
    embeddings are only comparable with new ones if this stays bit-exact.
    """
    h = 0
    for code in _utf16_code_units(value):
        h = (h * 31 + code) & 0xFFFFFFFF
        if h >= 0x80000000:
            h -= 0x100000000
    return abs(h)


class BaseEmbedder:
    """Common interface for text embedders."""

    def __init__(self, config=None):
        self.config = config
        self.dimension = getattr(config, 'embedding_dimension', EMBEDDING_DIMENSION)

    def encode_text(self, text: Optional[str]) -> np.ndarray:
        raise NotImplementedError

    def encode_batch(
        self,
        texts: List[str],
        batch_size: Optional[int] = None
    ) -> List[np.ndarray]:
        """Encode several texts; the default just loops over encode_text."""
        return [self.encode_text(text) for text in texts]

    def get_embedding_dimension(self) -> int:
        return self.dimension


class HashingEmbedder(BaseEmbedder):
    """Deterministic hashed bag-of-tokens embeddings."""

    def encode_text(self, text: Optional[str]) -> np.ndarray:
        """
        Encode a single text into an L2-normalized embedding vector.

        Args:
            text: Input text, may be empty or None

        Returns:
            Embedding vector as numpy array; all zeros if the text has no tokens
        """
        tokens = normalize_tokens(text)
        if not tokens:
            logger.debug("No tokens in text, returning zero embedding")
        return self.create_embedding(tokens)

    def create_embedding(self, tokens: List[str]) -> np.ndarray:
        """Accumulate token weights into hashed dimensions and normalize."""
        dimension = self.dimension
        vector = [0.0] * dimension

        for token in tokens:
            token_hash = string_hash(token)
            pattern = TECH_TERM_PATTERNS.get(token)
            if pattern is not None:
                for index, weight in enumerate(pattern):
                    vector[(token_hash + index * TECH_TERM_STRIDE) % dimension] += weight * TECH_TERM_WEIGHT
            else:
                for multiplier in TOKEN_MULTIPLIERS:
                    vector[(token_hash * multiplier) % dimension] += TOKEN_WEIGHT

        # Plain left-to-right sum, the norm must stay bit-identical
        squared = 0.0
        for value in vector:
            squared += value * value
        magnitude = np.sqrt(squared)

        embedding = np.array(vector, dtype=np.float64)
        if magnitude > 0:
            embedding = embedding / magnitude
        return embedding


class TransformerEmbedder(BaseEmbedder):
    """Compute semantic embeddings for text using sentence-transformers models."""

    def __init__(self, config):
        """
        Initialize embedder with model.

        Args:
            config: Configuration object
        """
        super().__init__(config)
        self.model = None
        self.model_name = config.embedding_model

        self._load_model()

    def _load_model(self, retry_count: int = 0) -> None:
        """
        Load the sentence transformer model.

        Args:
            retry_count: Current retry attempt
        """
        if not SENTENCE_TRANSFORMERS_AVAILABLE:
            raise RuntimeError("sentence-transformers library not available")

        try:
            logger.info(f"Loading model: {self.model_name}")
            self.model = SentenceTransformer(self.model_name)
            logger.info(f"Model loaded successfully: {self.model_name}")
        except Exception as e:
            logger.error(f"Failed to load model {self.model_name}: {str(e)}")

            if retry_count < 2:
                logger.info(f"Retrying model load (attempt {retry_count + 1})")
                time.sleep(1)
                self._load_model(retry_count + 1)
                return
            raise RuntimeError(f"Failed to load embedding model after retries: {str(e)}")

        model_dimension = self.model.get_sentence_embedding_dimension()
        if model_dimension != self.dimension:
            raise RuntimeError(
                f"Model {self.model_name} produces {model_dimension}-dim embeddings, "
                f"expected {self.dimension}"
            )

    def encode_text(self, text: Optional[str]) -> np.ndarray:
        if self.model is None:
            raise RuntimeError("Model not loaded")

        if not text or len(text.strip()) == 0:
            logger.warning("Empty text provided for encoding")
            return np.zeros(self.dimension)

        try:
            return self.model.encode(
                text,
                convert_to_numpy=True,
                show_progress_bar=False,
                normalize_embeddings=True
            )
        except Exception as e:
            logger.error(f"Encoding error: {str(e)}")
            raise

    def encode_batch(
        self,
        texts: List[str],
        batch_size: Optional[int] = None
    ) -> List[np.ndarray]:
        """
        Encode multiple texts in batches.

        Args:
            texts: List of input texts
            batch_size: Batch size for encoding, config.embedding_batch_size by default

        Returns:
            List of embedding vectors
        """
        if self.model is None:
            raise RuntimeError("Model not loaded")

        if not texts:
            return []

        if batch_size is None:
            batch_size = self.config.embedding_batch_size

        # Blank texts get zero vectors, same as encode_text
        positions = [i for i, text in enumerate(texts) if text and text.strip()]
        results = [np.zeros(self.dimension) for _ in texts]
        if not positions:
            return results

        try:
            embeddings = self.model.encode(
                [texts[i] for i in positions],
                convert_to_numpy=True,
                show_progress_bar=False,
                batch_size=batch_size,
                normalize_embeddings=True
            )
        except Exception as e:
            logger.error(f"Batch encoding error: {str(e)}")
            raise

        for position, embedding in zip(positions, embeddings):
            results[position] = embedding
        return results


EMBEDDER_BACKENDS = {
    'hashing': HashingEmbedder,
    'sentence-transformers': TransformerEmbedder,
}


def create_embedder(config) -> BaseEmbedder:
    """
    Build the embedder selected by ``config.embedding_backend``.

    Raises:
        ValueError: If the backend name is unknown
    """
    backend = getattr(config, 'embedding_backend', 'hashing')
    embedder_class = EMBEDDER_BACKENDS.get(backend)
    if embedder_class is None:
        raise ValueError(
            f"Unknown embedding backend '{backend}', "
            f"expected one of: {', '.join(sorted(EMBEDDER_BACKENDS))}"
        )
    logger.info(f"Using {backend} embedding backend")
    return embedder_class(config)


def generate_embedding(text: Optional[str]) -> np.ndarray:
    """Embed text with the default 384-dim hashing embedder."""
    return HashingEmbedder().encode_text(text)
