"""Generation pipeline: compose, render and store artifacts."""
from resume_render.pipeline.generator import (
    ApplicationArtifacts,
    BatchGenerationError,
    DocumentGenerator,
    DocumentPair,
)

__all__ = [
    "ApplicationArtifacts",
    "BatchGenerationError",
    "DocumentGenerator",
    "DocumentPair",
]
