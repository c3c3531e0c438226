"""
Inference executor.

Binds the padded batch tensors to the inputs the model declares, runs the
engine once and copies the flat output back onto the batch.
"""

from typing import Any

import numpy as np
import torch

from ort_pipelines_lite.batch.pipeline_batch import PipelineBatch
from ort_pipelines_lite.core.input_roles import get_input_tensor, resolve_input_roles
from ort_pipelines_lite.core.tensor_scope import TensorScope
from ort_pipelines_lite.errors import ExecutionError, TensorConstructionError
from ort_pipelines_lite.utils.logging import get_logger
from ort_pipelines_lite.utils.timings import Timings

logger = get_logger(__name__)


class InferenceExecutor:
    """Runs forward passes of one loaded model.

    Attributes:
        session: OrtSession (or compatible adapter) executing the model.
        output_dim: Last dimension of the model output.
        timings: Counter receiving the duration of every forward call.
    """

    def __init__(self, session: Any, output_dim: int, timings: Timings) -> None:
        if output_dim <= 0:
            raise ValueError(f"output_dim must be positive, got {output_dim}")

        self.session = session
        self.output_dim = output_dim
        self.timings = timings

    def forward(self, batch: PipelineBatch) -> PipelineBatch:
        """Run the model on a batch and populate its output tensor.

        Args:
            batch: Batch with padded input tensors.

        Returns:
            The same batch with output_tensor set to a flat float32 tensor of
            length batch_size * max_sequence * output_dim.

        Raises:
            UnsupportedInputError: If the model declares an input that is not
                a recognized role. Raised before any tensor is created.
            TensorConstructionError: If an input does not match the batch
                shape or cannot be wrapped.
            ExecutionError: If the engine fails.
            ResourceReleaseError: If a tensor handle cannot be released.
        """
        roles = resolve_input_roles([meta.name for meta in self.session.inputs_meta])
        output_name = self.session.outputs_meta[0].name

        batch_size, max_sequence = batch.input_shape
        if batch_size == 0:
            batch.output_tensor = torch.zeros(0, dtype=torch.float32)
            return batch

        logger.debug(
            "Forward batch_size=%d max_sequence=%d output_dim=%d",
            batch_size,
            max_sequence,
            self.output_dim,
        )

        try:
            with self.timings.measure(), TensorScope(self.session) as scope:
                inputs = {}
                for role in roles:
                    tensor = get_input_tensor(batch, role)
                    if tensor.numel() != batch_size * max_sequence:
                        raise TensorConstructionError(
                            f"Input '{role.value}' has {tensor.numel()} elements, "
                            f"expected {batch_size * max_sequence}"
                        )
                    # Shares memory with the batch tensor
                    array = np.ascontiguousarray(
                        tensor.reshape(batch_size, max_sequence).numpy(), dtype=np.int64
                    )
                    inputs[role.value] = scope.create(array)

                # Shape: [batch_size, max_sequence, output_dim]
                output = np.zeros((batch_size, max_sequence, self.output_dim), dtype=np.float32)
                output_handle = scope.create(output)

                self.session.run(inputs, {output_name: output_handle})
                result = torch.from_numpy(np.array(output_handle.numpy(), dtype=np.float32))
        except (TensorConstructionError, ExecutionError) as e:
            logger.error("Forward failed at %s stage: %s", e.stage, e)
            raise

        batch.output_tensor = result.reshape(-1)
        return batch
