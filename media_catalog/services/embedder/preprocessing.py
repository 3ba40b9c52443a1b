"""Text preprocessing for embedding. Applied before calling the embedding strategy."""

import re

from media_catalog.config.embedding.models import EmbeddingPreprocessing


def preprocess_text(text: str, opts: EmbeddingPreprocessing) -> str:
    """
    Apply preprocessing to a single text: collapse whitespace, lowercase, remove_punctuation,
    truncate by max_length (characters).
    """
    if not text:
        return ""
    s = text
    if opts.collapse_whitespace:
        s = re.sub(r"\s+", " ", s).strip()
    if opts.lowercase:
        s = s.lower()
    if opts.remove_punctuation:
        s = re.sub(r"[^\w\s]", "", s, flags=re.UNICODE)
    if opts.max_length > 0 and len(s) > opts.max_length:
        s = s[: opts.max_length]
    return s


def preprocess_texts(texts: list[str], opts: EmbeddingPreprocessing) -> list[str]:
    """Apply preprocessing to each text."""
    return [preprocess_text(t, opts) for t in texts]
