"""Test utilities for ort_pipelines_lite."""

from tests.utils.comparison import assert_padded_after, assert_tensors_close
from tests.utils.fake_session import (
    DEFAULT_INPUT_NAMES,
    DEFAULT_OUTPUT_DIM,
    FakeInferenceSession,
    FakeIOBinding,
    expected_output,
)

__all__ = [
    # Comparison utilities
    "assert_tensors_close",
    "assert_padded_after",
    # Fake engine
    "FakeInferenceSession",
    "FakeIOBinding",
    "expected_output",
    "DEFAULT_INPUT_NAMES",
    "DEFAULT_OUTPUT_DIM",
]
