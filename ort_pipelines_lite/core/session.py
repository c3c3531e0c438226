"""
Inference session adapter.

OrtSession wraps an onnxruntime InferenceSession and owns the per-call
tensor handles (OrtValues) created for it. Handles are tracked in a live set
so that leaks are observable and teardown can refuse to run while tensors
are still bound.
"""

import threading
from dataclasses import dataclass
from typing import Any, Dict, List, Tuple

import numpy as np
import onnxruntime as ort

from ort_pipelines_lite.errors import (
    ExecutionError,
    ModelLoadError,
    ResourceReleaseError,
)
from ort_pipelines_lite.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass
class TensorInfo:
    """Name, shape and element type of a declared model input or output.

    Dynamic dimensions appear as strings or None, as reported by the engine.
    """
    name: str
    shape: Tuple[Any, ...]
    element_type: str = ""


class OrtSession:
    """Adapter around an onnxruntime InferenceSession.

    Attributes:
        session: Underlying InferenceSession.
        inputs_meta: Declared inputs in model order.
        outputs_meta: Declared outputs in model order.
    """

    def __init__(self, session: Any) -> None:
        """Wrap an already created session.

        Args:
            session: onnxruntime InferenceSession (or an object exposing
                get_inputs, get_outputs, io_binding and run_with_iobinding).
        """
        self.session = session
        self.inputs_meta: List[TensorInfo] = [
            TensorInfo(meta.name, tuple(meta.shape), getattr(meta, "type", ""))
            for meta in session.get_inputs()
        ]
        self.outputs_meta: List[TensorInfo] = [
            TensorInfo(meta.name, tuple(meta.shape), getattr(meta, "type", ""))
            for meta in session.get_outputs()
        ]

        self._live_tensors: Dict[int, Any] = {}
        self._lock = threading.Lock()
        self._destroyed = False

    @classmethod
    def from_file(cls, model_file: str, config: Any) -> "OrtSession":
        """Create a session for an ONNX model file.

        Args:
            model_file: Path of the .onnx model.
            config: PipelineConfig providing thread counts, memory arena and
                execution providers.

        Returns:
            OrtSession wrapping the new InferenceSession.

        Raises:
            ModelLoadError: If the options are rejected or the model cannot
                be loaded.
        """
        try:
            options = ort.SessionOptions()
            options.intra_op_num_threads = config.intra_op_num_threads
            options.inter_op_num_threads = config.inter_op_num_threads
            options.enable_cpu_mem_arena = config.enable_cpu_mem_arena

            session = ort.InferenceSession(
                model_file,
                sess_options=options,
                providers=list(config.providers),
            )
        except Exception as e:
            raise ModelLoadError(f"Failed to load model {model_file}: {e}") from e

        return cls(session)

    @property
    def input_names(self) -> List[str]:
        return [meta.name for meta in self.inputs_meta]

    @property
    def output_names(self) -> List[str]:
        return [meta.name for meta in self.outputs_meta]

    @property
    def output_dim(self) -> int:
        """Last dimension of the first declared output.

        Raises:
            ModelLoadError: If there is no output or its last dimension is
                not a fixed positive integer.
        """
        if not self.outputs_meta:
            raise ModelLoadError("Model declares no outputs")

        shape = self.outputs_meta[0].shape
        if not shape or not isinstance(shape[-1], (int, np.integer)) or shape[-1] <= 0:
            raise ModelLoadError(
                f"Cannot determine output dimension from output "
                f"'{self.outputs_meta[0].name}' with shape {shape}"
            )
        return int(shape[-1])

    @property
    def live_tensors(self) -> int:
        """Number of tensor handles created and not yet released."""
        with self._lock:
            return len(self._live_tensors)

    def create_tensor(self, array: np.ndarray) -> ort.OrtValue:
        """Wrap a CPU array as a tensor handle without copying it.

        Args:
            array: Contiguous numpy array the handle reads from and, for
                outputs, writes into.

        Returns:
            Tracked OrtValue.
        """
        handle = ort.OrtValue.ortvalue_from_numpy(array)
        with self._lock:
            self._live_tensors[id(handle)] = handle
        return handle

    def release_tensor(self, handle: ort.OrtValue) -> None:
        """Release a handle returned by create_tensor.

        Raises:
            ResourceReleaseError: If the handle is not live.
        """
        with self._lock:
            if self._live_tensors.pop(id(handle), None) is None:
                raise ResourceReleaseError("Tensor handle is not owned by this session")

    def run(self, inputs: Dict[str, ort.OrtValue], outputs: Dict[str, ort.OrtValue]) -> None:
        """Execute the model once with pre-bound inputs and outputs.

        Args:
            inputs: Input name to tensor handle.
            outputs: Output name to pre-allocated tensor handle.

        Raises:
            ExecutionError: If binding or execution fails.
        """
        binding = None
        try:
            if self.session is None:
                raise RuntimeError("session has been destroyed")
            binding = self.session.io_binding()
            for name, handle in inputs.items():
                binding.bind_ortvalue_input(name, handle)
            for name, handle in outputs.items():
                binding.bind_ortvalue_output(name, handle)

            self.session.run_with_iobinding(binding)
        except Exception as e:
            raise ExecutionError(f"Inference failed: {e}") from e
        finally:
            if binding is not None:
                binding.clear_binding_inputs()
                binding.clear_binding_outputs()

    def destroy(self) -> None:
        """Drop the underlying session.

        Raises:
            ResourceReleaseError: If tensor handles are still live.
        """
        if self._destroyed:
            return

        live = self.live_tensors
        if live:
            raise ResourceReleaseError(
                f"Cannot destroy session with {live} live tensor handle(s)"
            )

        self.session = None
        self._destroyed = True
        logger.debug("Inference session destroyed")
