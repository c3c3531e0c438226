"""
Fake onnxruntime sessions for tests.

FakeInferenceSession implements the part of the onnxruntime
InferenceSession API that OrtSession uses: get_inputs, get_outputs,
io_binding and run_with_iobinding. Its output is a deterministic function of
each (row, column) of the bound inputs, so output row i depends only on
input row i.
"""

import threading
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

import numpy as np

DEFAULT_INPUT_NAMES = ("input_ids", "token_type_ids", "attention_mask")
DEFAULT_OUTPUT_DIM = 4


@dataclass
class FakeNodeArg:
    """Stand-in for onnxruntime.NodeArg."""
    name: str
    shape: List[Any]
    type: str


@dataclass
class FakeIOBinding:
    """Records bound OrtValues like onnxruntime.IOBinding."""
    inputs: Dict[str, Any] = field(default_factory=dict)
    outputs: Dict[str, Any] = field(default_factory=dict)
    cleared: bool = False

    def bind_ortvalue_input(self, name: str, ortvalue: Any) -> None:
        self.inputs[name] = ortvalue

    def bind_ortvalue_output(self, name: str, ortvalue: Any) -> None:
        self.outputs[name] = ortvalue

    def clear_binding_inputs(self) -> None:
        self.inputs.clear()
        self.cleared = True

    def clear_binding_outputs(self) -> None:
        self.outputs.clear()


def expected_output(
    ids: np.ndarray,
    type_ids: Optional[np.ndarray],
    attention_mask: Optional[np.ndarray],
    output_dim: int,
) -> np.ndarray:
    """Compute the fake model output for [batch, seq] int64 inputs."""
    values = ids.astype(np.float32) * 10.0
    if type_ids is not None:
        values = values + type_ids.astype(np.float32) * 100.0
    if attention_mask is not None:
        values = values + attention_mask.astype(np.float32) * 0.5
    # Shape: [batch, seq, output_dim]
    return values[:, :, None] + np.arange(output_dim, dtype=np.float32)


class FakeInferenceSession:
    """In-memory model with the InferenceSession binding API."""

    def __init__(
        self,
        input_names: Sequence[str] = DEFAULT_INPUT_NAMES,
        output_dim: Any = DEFAULT_OUTPUT_DIM,
        output_name: str = "last_hidden_state",
        fail_with: Optional[Exception] = None,
    ) -> None:
        self.input_names = list(input_names)
        self.output_dim = output_dim
        self.output_name = output_name
        self.fail_with = fail_with
        self.bindings: List[FakeIOBinding] = []
        self.run_count = 0
        self._lock = threading.Lock()

    def get_inputs(self) -> List[FakeNodeArg]:
        return [
            FakeNodeArg(name, ["batch_size", "sequence_length"], "tensor(int64)")
            for name in self.input_names
        ]

    def get_outputs(self) -> List[FakeNodeArg]:
        return [
            FakeNodeArg(
                self.output_name,
                ["batch_size", "sequence_length", self.output_dim],
                "tensor(float)",
            )
        ]

    def io_binding(self) -> FakeIOBinding:
        binding = FakeIOBinding()
        with self._lock:
            self.bindings.append(binding)
        return binding

    def run_with_iobinding(self, binding: FakeIOBinding) -> None:
        with self._lock:
            self.run_count += 1

        if self.fail_with is not None:
            raise self.fail_with

        def bound(name: str) -> Optional[np.ndarray]:
            ortvalue = binding.inputs.get(name)
            return None if ortvalue is None else ortvalue.numpy()

        output = expected_output(
            bound("input_ids"),
            bound("token_type_ids"),
            bound("attention_mask"),
            int(self.output_dim),
        )
        binding.outputs[self.output_name].update_inplace(output)
