"""Mean pooling of token-level feature vectors into a single embedding."""

import math
from collections.abc import Sequence

from pdfchat.errors import ShapeError


def average_pool(nested: Sequence[Sequence[Sequence[float]]]) -> list[float]:
    """Average a [1 x N x D] feature array into one D-dimensional vector.

    Each output component is the arithmetic mean of that component over the
    N token vectors.

    Args:
        nested: Feature-extraction output for one input text

    Returns:
        list[float]: The pooled vector of length D

    Raises:
        ShapeError: If the outer dimension is not 1, N is 0, D is 0,
            or token vectors differ in length
    """
    if len(nested) != 1:
        raise ShapeError(f"Expected a batch of exactly one input, got {len(nested)}")

    vectors = nested[0]
    if len(vectors) == 0:
        raise ShapeError("Cannot pool zero token vectors")

    dimension = len(vectors[0])
    if dimension == 0:
        raise ShapeError("Token vectors must not be empty")

    for position, vector in enumerate(vectors):
        if len(vector) != dimension:
            raise ShapeError(
                f"Token vector {position} has dimension {len(vector)}, expected {dimension}"
            )

    count = len(vectors)
    return [math.fsum(column) / count for column in zip(*vectors)]


def pool_embedding(output: Sequence) -> list[float]:
    """Normalize feature-extraction output to a single vector.

    Sentence-embedding models return [D] directly; token-level models return
    [N x D] or [1 x N x D], which are mean pooled.

    Raises:
        ShapeError: If the output is empty or nested deeper than three levels
    """
    if len(output) == 0:
        raise ShapeError("Empty feature-extraction output")

    first = output[0]
    if isinstance(first, (int, float)):
        return [float(value) for value in output]

    if len(first) == 0:
        return average_pool(output)

    if isinstance(first[0], (int, float)):
        return average_pool([output])

    if len(first[0]) == 0 or isinstance(first[0][0], (int, float)):
        return average_pool(output)

    raise ShapeError("Unsupported feature-extraction output shape")
