"""
Pipeline entry points.

A Pipeline turns input strings into a padded PipelineBatch (preprocess) and
runs the model on it (forward). Calls may run concurrently from several
threads on the same instance; destroy must not race in-flight calls.
"""

from typing import Dict, List, Sequence

from ort_pipelines_lite.batch.pipeline_batch import PipelineBatch
from ort_pipelines_lite.batch.tensor_builder import (
    compute_max_sequence,
    convert_inputs_to_tensors,
)
from ort_pipelines_lite.batch.tokenized_input import TokenizedInput
from ort_pipelines_lite.core.config import PipelineConfig
from ort_pipelines_lite.core.executor import InferenceExecutor
from ort_pipelines_lite.core.model_context import ModelContext
from ort_pipelines_lite.errors import PipelineClosedError, TensorConstructionError
from ort_pipelines_lite.utils.logging import get_logger
from ort_pipelines_lite.utils.timings import TimingStats

logger = get_logger(__name__)


class Pipeline:
    """Tokenize, batch and run a model over input strings.

    Attributes:
        context: ModelContext holding session, tokenizer and timings.
        executor: InferenceExecutor bound to the context's session.
    """

    def __init__(self, context: ModelContext) -> None:
        self.context = context
        self.executor = InferenceExecutor(
            context.session,
            context.output_dim,
            context.pipeline_timings,
        )

    @classmethod
    def from_config(cls, config: PipelineConfig) -> "Pipeline":
        """Load the model described by config and build a pipeline."""
        return cls(ModelContext.load(config))

    @property
    def name(self) -> str:
        return self.context.config.pipeline_name

    def get_output_dim(self) -> int:
        return self.context.output_dim

    def _check_open(self) -> None:
        if self.context.is_destroyed:
            raise PipelineClosedError(f"Pipeline '{self.name}' has been destroyed")

    def tokenize(self, text: str) -> TokenizedInput:
        """Encode one string into a TokenizedInput.

        Raises:
            TensorConstructionError: If the tokenizer rejects the input.
        """
        try:
            encoding = self.context.tokenizer(text, **self.context.config.tokenizer_kwargs())
        except Exception as e:
            raise TensorConstructionError(f"Failed to tokenize input {text!r}: {e}") from e
        return TokenizedInput.from_encoding(text, encoding)

    def preprocess(self, inputs: Sequence[str]) -> PipelineBatch:
        """Tokenize input strings and build padded batch tensors.

        Tokenization and tensor construction are recorded together as one
        call on the tokenizer timings.

        Args:
            inputs: Input strings. Row i of every tensor corresponds to
                inputs[i].

        Returns:
            PipelineBatch without output.
        """
        self._check_open()

        with self.context.tokenizer_timings.measure():
            records: List[TokenizedInput] = [self.tokenize(text) for text in inputs]
            max_sequence = compute_max_sequence(records)
            batch = convert_inputs_to_tensors(
                records,
                max_sequence,
                self.context.has_token_type_ids,
                self.context.has_attention_mask,
            )

        logger.debug(
            "Preprocessed %d input(s) to max_sequence=%d", len(records), max_sequence
        )
        return batch

    def forward(self, batch: PipelineBatch) -> PipelineBatch:
        """Run the model on a preprocessed batch.

        Returns:
            The batch with output_tensor populated.
        """
        self._check_open()
        return self.executor.forward(batch)

    def run(self, inputs: Sequence[str]) -> PipelineBatch:
        """Preprocess and forward input strings in one call."""
        return self.forward(self.preprocess(inputs))

    def get_stats(self) -> Dict[str, TimingStats]:
        """Get timing statistics of both stages.

        Returns:
            Dictionary with "tokenizer" and "pipeline" TimingStats.
        """
        return {
            "tokenizer": self.context.tokenizer_timings.get_stats(),
            "pipeline": self.context.pipeline_timings.get_stats(),
        }

    def destroy(self) -> None:
        """Release the model session and tokenizer."""
        self.context.destroy()

    def __enter__(self) -> "Pipeline":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.destroy()
