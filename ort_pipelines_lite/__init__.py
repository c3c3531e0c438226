"""
ort_pipelines_lite: Batched ONNX Runtime inference over tokenized text.

This package provides:
- Tokenization of input strings into aligned id / mask arrays
- Padding of variable-length inputs into row-major batch tensors
- Execution of ONNX models on those tensors with scoped tensor handles
- Per-stage timing counters for tokenization and inference
"""

__version__ = "0.1.0"
__author__ = "ort-pipelines-lite contributors"

from ort_pipelines_lite.batch import PipelineBatch, TokenizedInput
from ort_pipelines_lite.core import ModelContext, Pipeline, PipelineConfig
from ort_pipelines_lite.errors import (
    ExecutionError,
    ModelLoadError,
    PipelineClosedError,
    PipelineError,
    ResourceReleaseError,
    TensorConstructionError,
    UnsupportedInputError,
)
from ort_pipelines_lite.utils import Timings, TimingStats

__all__ = [
    "Pipeline",
    "PipelineConfig",
    "ModelContext",
    "PipelineBatch",
    "TokenizedInput",
    "Timings",
    "TimingStats",
    "PipelineError",
    "ModelLoadError",
    "UnsupportedInputError",
    "TensorConstructionError",
    "ExecutionError",
    "ResourceReleaseError",
    "PipelineClosedError",
]
