"""Text embedding backends."""
from .tokenizer import normalize_tokens, preprocess_text, tokenize
from .embedder import (
    EMBEDDING_DIMENSION,
    BaseEmbedder,
    HashingEmbedder,
    TransformerEmbedder,
    create_embedder,
    generate_embedding,
    string_hash
)

__all__ = [
    'EMBEDDING_DIMENSION',
    'BaseEmbedder',
    'HashingEmbedder',
    'TransformerEmbedder',
    'create_embedder',
    'generate_embedding',
    'string_hash',
    'normalize_tokens',
    'preprocess_text',
    'tokenize'
]
