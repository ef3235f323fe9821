"""Character-based transcript chunking for summarization."""

import math


def chunk_text(text: str, parts: int = 4) -> list[str]:
    """
    Split text into contiguous, equal-length character ranges.

    The part size is ceil(len(text) / parts), so the last chunk may be
    shorter and trailing empty chunks are dropped. Splits ignore word
    boundaries.

    Args:
        text: Text to split
        parts: Desired number of chunks

    Returns:
        Ordered chunks whose concatenation equals the input
    """
    if parts < 1:
        raise ValueError("parts must be at least 1")
    if not text:
        return []

    size = math.ceil(len(text) / parts)
    chunks = []
    for i in range(parts):
        segment = text[i * size : (i + 1) * size]
        if segment:
            chunks.append(segment)
    return chunks
