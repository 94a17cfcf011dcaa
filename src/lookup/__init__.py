from __future__ import annotations

from src.lookup.pipeline import (
    FAILURE_MESSAGE,
    LookupPipeline,
    PipelineState,
    SharedResources,
    build_pipeline,
    build_resources,
)

__all__ = [
    "FAILURE_MESSAGE",
    "LookupPipeline",
    "PipelineState",
    "SharedResources",
    "build_pipeline",
    "build_resources",
]
