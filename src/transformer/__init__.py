"""Docusaurus v1 page to v2 page transformer."""

from .core import (
    TransformContext,
    TransformError,
    TransformResult,
    Transformer,
    transform,
    transform_source,
)

__all__ = [
    "TransformContext",
    "TransformError",
    "TransformResult",
    "Transformer",
    "transform",
    "transform_source",
]
