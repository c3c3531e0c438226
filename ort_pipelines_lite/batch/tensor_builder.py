"""
Batch tensor construction.

Converts tokenized records into the padded row-major int64 tensors the
inference engine expects. Zero is the padding value for all three tensors.
Rows keep the caller's order; there is no sorting or bucketing by length.
"""

from typing import Sequence

import torch

from ort_pipelines_lite.batch.pipeline_batch import PipelineBatch
from ort_pipelines_lite.batch.tokenized_input import TokenizedInput
from ort_pipelines_lite.errors import TensorConstructionError


def compute_max_sequence(inputs: Sequence[TokenizedInput]) -> int:
    """Return the padding target for a batch.

    Args:
        inputs: Tokenized records of the batch.

    Returns:
        1 + the largest max_attention_index, or 1 for an empty batch.
    """
    if not inputs:
        return 1
    return 1 + max(record.max_attention_index for record in inputs)


def _fill_row(
    target: torch.Tensor,
    row: int,
    values: Sequence[int],
    length: int,
    channel: str,
) -> None:
    if len(values) < length:
        raise TensorConstructionError(
            f"Input {row} has {len(values)} {channel} values for {length} tokens"
        )
    target[row, :length] = torch.tensor(values[:length], dtype=torch.int64)


def convert_inputs_to_tensors(
    inputs: Sequence[TokenizedInput],
    max_sequence: int,
    has_token_type_ids: bool,
    has_attention_mask: bool,
) -> PipelineBatch:
    """Build a PipelineBatch with padded input tensors.

    Args:
        inputs: Tokenized records in caller order.
        max_sequence: Number of columns of every row.
        has_token_type_ids: Whether the model declares token_type_ids. When
            False the type ids tensor stays zero.
        has_attention_mask: Whether the model declares attention_mask. When
            False the attention mask tensor stays zero.

    Returns:
        PipelineBatch with flat tensors of length len(inputs) * max_sequence.

    Raises:
        TensorConstructionError: If max_sequence is not positive or a
            declared channel is shorter than the token ids.
    """
    if max_sequence <= 0:
        raise TensorConstructionError(f"max_sequence must be positive, got {max_sequence}")

    batch_size = len(inputs)

    # Shape: [batch_size, max_sequence], zero-filled so padding needs no writes
    ids_tensor = torch.zeros((batch_size, max_sequence), dtype=torch.int64)
    type_ids_tensor = torch.zeros((batch_size, max_sequence), dtype=torch.int64)
    attention_masks_tensor = torch.zeros((batch_size, max_sequence), dtype=torch.int64)

    for i, record in enumerate(inputs):
        # Tokens past max_sequence are trailing padding from the tokenizer
        length = min(len(record.token_ids), max_sequence)
        if length == 0:
            continue

        _fill_row(ids_tensor, i, record.token_ids, length, "token id")
        if has_token_type_ids:
            _fill_row(type_ids_tensor, i, record.type_ids, length, "type id")
        if has_attention_mask:
            _fill_row(attention_masks_tensor, i, record.attention_mask, length, "attention mask")

    return PipelineBatch(
        input=list(inputs),
        ids_tensor=ids_tensor.reshape(-1),
        type_ids_tensor=type_ids_tensor.reshape(-1),
        attention_masks_tensor=attention_masks_tensor.reshape(-1),
        max_sequence=max_sequence,
    )
