"""
Batch construction.

Provides:
- TokenizedInput: Tokenizer output for one input string
- PipelineBatch: Padded batch flowing from preprocess to forward
- Tensor builder: Padding of tokenized inputs into row-major tensors
"""

from ort_pipelines_lite.batch.tokenized_input import (
    TokenizedInput,
    compute_max_attention_index,
)
from ort_pipelines_lite.batch.pipeline_batch import PipelineBatch
from ort_pipelines_lite.batch.tensor_builder import (
    compute_max_sequence,
    convert_inputs_to_tensors,
)

__all__ = [
    "TokenizedInput",
    "PipelineBatch",
    "compute_max_attention_index",
    "compute_max_sequence",
    "convert_inputs_to_tensors",
]
