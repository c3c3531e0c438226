"""
Recognized model input roles.

A model may declare any subset of the roles below. Each role maps to the
batch tensor bound to it; supporting a new input is one table entry.
"""

from enum import Enum
from typing import Callable, Dict, List, Sequence

import torch

from ort_pipelines_lite.batch.pipeline_batch import PipelineBatch
from ort_pipelines_lite.errors import UnsupportedInputError


class InputRole(Enum):
    """Model input names the pipeline knows how to populate."""

    INPUT_IDS = "input_ids"
    TOKEN_TYPE_IDS = "token_type_ids"
    ATTENTION_MASK = "attention_mask"


INPUT_TENSOR_GETTERS: Dict[InputRole, Callable[[PipelineBatch], torch.Tensor]] = {
    InputRole.INPUT_IDS: lambda batch: batch.ids_tensor,
    InputRole.TOKEN_TYPE_IDS: lambda batch: batch.type_ids_tensor,
    InputRole.ATTENTION_MASK: lambda batch: batch.attention_masks_tensor,
}


def resolve_input_roles(names: Sequence[str]) -> List[InputRole]:
    """Map declared input names to roles, preserving their order.

    Args:
        names: Input names declared by the model.

    Returns:
        One InputRole per name.

    Raises:
        UnsupportedInputError: If any name is not a recognized role.
    """
    known = {role.value: role for role in InputRole}
    unsupported = [name for name in names if name not in known]
    if unsupported:
        raise UnsupportedInputError(unsupported)
    return [known[name] for name in names]


def get_input_tensor(batch: PipelineBatch, role: InputRole) -> torch.Tensor:
    """Return the flat batch tensor bound to a role."""
    return INPUT_TENSOR_GETTERS[role](batch)
