"""
Core pipeline module.

Provides the main API and the components it orchestrates:
- Pipeline: preprocess / forward entry points
- ModelContext: Loaded session, tokenizer, metadata and timings
- InferenceExecutor: Binding of batch tensors and engine invocation
- OrtSession: onnxruntime session adapter owning per-call tensor handles
- TensorScope: Scoped release of per-call tensor handles
- PipelineConfig: Model location, session and tokenizer options
"""

from ort_pipelines_lite.core.config import PipelineConfig
from ort_pipelines_lite.core.executor import InferenceExecutor
from ort_pipelines_lite.core.input_roles import InputRole, resolve_input_roles
from ort_pipelines_lite.core.model_context import ModelContext
from ort_pipelines_lite.core.pipeline import Pipeline
from ort_pipelines_lite.core.session import OrtSession, TensorInfo
from ort_pipelines_lite.core.tensor_scope import TensorScope

__all__ = [
    "Pipeline",
    "PipelineConfig",
    "ModelContext",
    "InferenceExecutor",
    "InputRole",
    "resolve_input_roles",
    "OrtSession",
    "TensorInfo",
    "TensorScope",
]
