"""
Pytest configuration and shared fixtures for ort-pipelines-lite tests.

This module provides reusable fixtures for testing, including:
- A tiny word-level tokenizer saved as tokenizer.json
- Fake inference sessions wrapped in OrtSession
- Model contexts and pipelines built from both
"""

from typing import Callable

import pytest
from tokenizers import Tokenizer, models, pre_tokenizers, processors

from ort_pipelines_lite.core.config import PipelineConfig
from ort_pipelines_lite.core.model_context import ModelContext, load_tokenizer
from ort_pipelines_lite.core.pipeline import Pipeline
from ort_pipelines_lite.core.session import OrtSession
from tests.utils.fake_session import DEFAULT_OUTPUT_DIM, FakeInferenceSession

VOCAB = {
    "[PAD]": 0,
    "[UNK]": 1,
    "[CLS]": 2,
    "[SEP]": 3,
    "hello": 4,
    "world": 5,
    "today": 6,
    "good": 7,
    "morning": 8,
}

OUTPUT_DIM = DEFAULT_OUTPUT_DIM


def build_tokenizer() -> Tokenizer:
    """Build a whitespace word-level tokenizer with [CLS] ... [SEP] template."""
    tokenizer = Tokenizer(models.WordLevel(vocab=VOCAB, unk_token="[UNK]"))
    tokenizer.pre_tokenizer = pre_tokenizers.Whitespace()
    tokenizer.post_processor = processors.TemplateProcessing(
        single="[CLS] $A [SEP]",
        pair="[CLS] $A [SEP] $B:1 [SEP]:1",
        special_tokens=[("[CLS]", VOCAB["[CLS]"]), ("[SEP]", VOCAB["[SEP]"])],
    )
    return tokenizer


@pytest.fixture
def model_dir(tmp_path):
    """
    Directory holding tokenizer.json (no model.onnx).

    Returns:
        pathlib.Path of the directory
    """
    build_tokenizer().save(str(tmp_path / "tokenizer.json"))
    return tmp_path


@pytest.fixture
def tokenizer(model_dir):
    """Fast tokenizer loaded the same way pipelines load it."""
    return load_tokenizer(str(model_dir / "tokenizer.json"))


@pytest.fixture
def pipeline_config(model_dir) -> PipelineConfig:
    return PipelineConfig(model_path=str(model_dir), pipeline_name="test")


@pytest.fixture
def fake_session() -> FakeInferenceSession:
    """Fake engine declaring input_ids, token_type_ids and attention_mask."""
    return FakeInferenceSession(output_dim=OUTPUT_DIM)


@pytest.fixture
def make_pipeline(tokenizer, pipeline_config) -> Callable[..., Pipeline]:
    """
    Factory building a Pipeline around a FakeInferenceSession.

    Example:
        def test_no_mask(make_pipeline):
            pipeline = make_pipeline(input_names=("input_ids",))
    """
    def _make(**session_kwargs) -> Pipeline:
        session_kwargs.setdefault("output_dim", OUTPUT_DIM)
        fake = FakeInferenceSession(**session_kwargs)
        context = ModelContext(OrtSession(fake), tokenizer, pipeline_config)
        return Pipeline(context)

    return _make


@pytest.fixture
def pipeline(make_pipeline) -> Pipeline:
    return make_pipeline()
