"""
PipelineBatch dataclass.

A PipelineBatch is the unit of work flowing from preprocess to forward. Its
input tensors are flat, row-major int64 buffers of length
``batch_size * max_sequence``; row r occupies
``[r * max_sequence, (r + 1) * max_sequence)``.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

import torch

from ort_pipelines_lite.batch.tokenized_input import TokenizedInput


@dataclass
class PipelineBatch:
    """Padded batch of tokenized inputs and, after forward, the model output.

    Attributes:
        input: Tokenized records in caller order.
        ids_tensor: Flat int64 token ids.
        type_ids_tensor: Flat int64 token type ids (zeros if the model does
            not declare token_type_ids).
        attention_masks_tensor: Flat int64 attention mask (zeros if the model
            does not declare attention_mask).
        max_sequence: Padded sequence length shared by every row.
        output_tensor: Flat float32 model output, set by forward.
    """

    input: List[TokenizedInput]
    ids_tensor: torch.Tensor
    type_ids_tensor: torch.Tensor
    attention_masks_tensor: torch.Tensor
    max_sequence: int
    output_tensor: Optional[torch.Tensor] = None

    @property
    def batch_size(self) -> int:
        return len(self.input)

    @property
    def input_shape(self) -> Tuple[int, int]:
        """Shape (batch_size, max_sequence) of every input tensor."""
        return (self.batch_size, self.max_sequence)

    def row_view(self, tensor: torch.Tensor) -> torch.Tensor:
        """View a flat input tensor as (batch_size, max_sequence)."""
        return tensor.view(self.batch_size, self.max_sequence)

    def output_view(self, output_dim: int) -> torch.Tensor:
        """View the flat output as (batch_size, max_sequence, output_dim).

        Raises:
            ValueError: If forward has not populated the output yet.
        """
        if self.output_tensor is None:
            raise ValueError("output_tensor is not populated; run forward first")
        return self.output_tensor.view(self.batch_size, self.max_sequence, output_dim)
