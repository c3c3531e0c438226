"""
Model execution context shared by pipelines.

A ModelContext owns everything a pipeline needs to serve calls: the
inference session, the tokenizer, the declared input/output metadata and
the two per-stage timing counters. It is loaded once and is immutable for
the lifetime of the pipeline that holds it.
"""

import os
from typing import Any, List

from transformers import PreTrainedTokenizerFast

from ort_pipelines_lite.core.config import PipelineConfig
from ort_pipelines_lite.core.input_roles import InputRole, resolve_input_roles
from ort_pipelines_lite.core.session import OrtSession, TensorInfo
from ort_pipelines_lite.errors import ModelLoadError, ResourceReleaseError
from ort_pipelines_lite.utils.logging import get_logger
from ort_pipelines_lite.utils.timings import Timings

logger = get_logger(__name__)


def load_tokenizer(tokenizer_path: str) -> PreTrainedTokenizerFast:
    """Load a fast tokenizer from a tokenizer.json file.

    Raises:
        ModelLoadError: If the file is missing or cannot be parsed.
    """
    if not os.path.isfile(tokenizer_path):
        raise ModelLoadError(f"Tokenizer file not found: {tokenizer_path}")

    try:
        return PreTrainedTokenizerFast(tokenizer_file=tokenizer_path)
    except Exception as e:
        raise ModelLoadError(f"Failed to load tokenizer {tokenizer_path}: {e}") from e


class ModelContext:
    """Session, tokenizer, metadata and timings of one loaded model.

    Attributes:
        session: OrtSession executing the model.
        tokenizer: Fast tokenizer encoding input strings.
        config: Configuration the context was built from.
        has_token_type_ids: Whether the model declares token_type_ids.
        has_attention_mask: Whether the model declares attention_mask.
        output_dim: Last dimension of the model output.
        tokenizer_timings: Counter for tokenization and batch construction.
        pipeline_timings: Counter for forward passes.
    """

    def __init__(self, session: OrtSession, tokenizer: Any, config: PipelineConfig) -> None:
        """Build a context from an already loaded session and tokenizer.

        Raises:
            UnsupportedInputError: If the model declares an input that is
                not a recognized role.
            ModelLoadError: If the model does not declare exactly one output
                or the output dimension cannot be determined.
        """
        roles = resolve_input_roles(session.input_names)
        if len(session.outputs_meta) != 1:
            raise ModelLoadError(
                f"Model must declare exactly one output, got {session.output_names}"
            )

        self.session = session
        self.tokenizer = tokenizer
        self.config = config
        self.has_token_type_ids = InputRole.TOKEN_TYPE_IDS in roles
        self.has_attention_mask = InputRole.ATTENTION_MASK in roles
        self.output_dim = config.output_dim if config.output_dim is not None else session.output_dim

        self.tokenizer_timings = Timings(f"{config.pipeline_name}.tokenizer")
        self.pipeline_timings = Timings(f"{config.pipeline_name}.pipeline")
        self._destroyed = False

    @classmethod
    def load(cls, config: PipelineConfig) -> "ModelContext":
        """Load tokenizer and model from config.model_path.

        Raises:
            ModelLoadError: If any artifact is missing or invalid. No partial
                context is returned.
        """
        logger.info("Loading tokenizer config: %s", config.tokenizer_path)
        tokenizer = load_tokenizer(config.tokenizer_path)

        if not os.path.isfile(config.model_file):
            raise ModelLoadError(f"Model file not found: {config.model_file}")

        logger.info("Loading model at %s", config.model_file)
        session = OrtSession.from_file(config.model_file, config)

        context = cls(session, tokenizer, config)
        logger.info(
            "Loaded %s: inputs=%s outputs=%s output_dim=%d",
            config.pipeline_name,
            context.input_names,
            context.output_names,
            context.output_dim,
        )
        return context

    @property
    def inputs_meta(self) -> List[TensorInfo]:
        return self.session.inputs_meta

    @property
    def outputs_meta(self) -> List[TensorInfo]:
        return self.session.outputs_meta

    @property
    def input_names(self) -> List[str]:
        return self.session.input_names

    @property
    def output_names(self) -> List[str]:
        return self.session.output_names

    @property
    def is_destroyed(self) -> bool:
        return self._destroyed

    def destroy(self) -> None:
        """Release the session and tokenizer. Safe to call more than once.

        Raises:
            ResourceReleaseError: If the session cannot be released.
        """
        if self._destroyed:
            return

        try:
            self.session.destroy()
        except ResourceReleaseError:
            raise
        except Exception as e:
            raise ResourceReleaseError(f"Failed to destroy session: {e}") from e

        self.tokenizer = None
        self._destroyed = True
        logger.info("Destroyed %s", self.config.pipeline_name)
