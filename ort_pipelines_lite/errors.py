"""Exceptions raised by ort_pipelines_lite.

Every error carries the pipeline stage that failed. Underlying causes are
chained with ``raise ... from`` so engine and tokenizer diagnostics are
preserved.
"""

from typing import Optional


class PipelineError(Exception):
    """Base class for pipeline errors."""

    stage = "pipeline"

    def __init__(self, message: str, stage: Optional[str] = None) -> None:
        super().__init__(message)
        if stage is not None:
            self.stage = stage


class ModelLoadError(PipelineError):
    """Raised when a model or tokenizer cannot be loaded or is misconfigured."""

    stage = "load"


class UnsupportedInputError(ModelLoadError):
    """Raised when a model declares an input outside the recognized roles."""

    def __init__(self, names) -> None:
        self.names = list(names)
        super().__init__(f"Unsupported model input name(s): {', '.join(self.names)}")


class TensorConstructionError(PipelineError):
    """Raised when batch tensors cannot be built or wrapped."""

    stage = "construction"


class ExecutionError(PipelineError):
    """Raised when the inference engine fails to execute a batch."""

    stage = "execution"


class ResourceReleaseError(PipelineError):
    """Raised when a tensor, session or tokenizer handle cannot be released."""

    stage = "release"


class PipelineClosedError(PipelineError):
    """Raised when a destroyed pipeline is called."""

    stage = "lifecycle"
