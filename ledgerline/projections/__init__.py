"""Inline projections: read models updated right after events are appended.

This package provides:
- inline_projection / ProjectionDefinition: declare a projection
- apply_projection: fold a batch into one stored document
- RetryingReader / ReadRetryPolicy: resilient document reads
- handle_inline_projections: dispatch a batch to interested projections
- ReadModelMetadata: the ``_metadata`` envelope of stored documents
"""

from .applier import ApplyOutcome, ProjectionContext, apply_projection
from .definition import (
    DEFAULT_PROJECTION_NAME,
    ProjectionDefinition,
    inline_projection,
)
from .dispatcher import ProjectionResult, handle_inline_projections
from .metadata import (
    METADATA_KEY,
    ReadModelMetadata,
    attach_metadata,
    read_metadata,
    stream_position_of,
    strip_metadata,
)
from .reader import ReadRetryPolicy, RetryingReader, read_with_timeout, reset_connection

__all__ = [
    "DEFAULT_PROJECTION_NAME",
    "METADATA_KEY",
    "ApplyOutcome",
    "ProjectionContext",
    "ProjectionDefinition",
    "ProjectionResult",
    "ReadModelMetadata",
    "ReadRetryPolicy",
    "RetryingReader",
    "apply_projection",
    "attach_metadata",
    "handle_inline_projections",
    "inline_projection",
    "read_metadata",
    "read_with_timeout",
    "reset_connection",
    "stream_position_of",
    "strip_metadata",
]
