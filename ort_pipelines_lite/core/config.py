"""
Pipeline configuration.

This module defines the PipelineConfig class which stores where the model
artifacts live, how the inference session is configured and which options
are passed to the tokenizer.
"""

import os
from typing import Any, Dict, Optional, Sequence

TOKENIZER_FILE = "tokenizer.json"
MODEL_FILE = "model.onnx"


class PipelineConfig:
    """Configuration class for a pipeline.

    The session defaults to one intra-op and one inter-op thread so that
    concurrency comes from callers running batches in parallel, not from
    the engine spawning its own workers.

    Attributes:
        model_path: Directory holding tokenizer.json and model.onnx.
        pipeline_name: Name used in logs and statistics.
        intra_op_num_threads: Threads used inside a single operator.
        inter_op_num_threads: Threads used to run operators in parallel.
        enable_cpu_mem_arena: Whether the engine uses its CPU memory arena.
        add_special_tokens: Whether the tokenizer adds special tokens.
        max_length: Optional truncation length for tokenization.
        output_dim: Optional override of the model's output dimension.
        providers: Execution providers passed to the session.
    """

    def __init__(
        self,
        model_path: str,
        pipeline_name: str = "pipeline",
        intra_op_num_threads: int = 1,
        inter_op_num_threads: int = 1,
        enable_cpu_mem_arena: bool = True,
        add_special_tokens: bool = True,
        max_length: Optional[int] = None,
        output_dim: Optional[int] = None,
        providers: Sequence[str] = ("CPUExecutionProvider",),
        **kwargs: Any,
    ) -> None:
        """Initialize PipelineConfig.

        Args:
            model_path: Directory holding tokenizer.json and model.onnx.
            pipeline_name: Name used in logs and statistics.
            intra_op_num_threads: Threads used inside a single operator.
            inter_op_num_threads: Threads used to run operators in parallel.
            enable_cpu_mem_arena: Whether the engine uses its CPU memory arena.
            add_special_tokens: Whether the tokenizer adds special tokens.
            max_length: Optional truncation length for tokenization.
            output_dim: Optional override of the model's output dimension.
            providers: Execution providers passed to the session.
            **kwargs: Additional configuration parameters (ignored).
        """
        self.model_path = model_path
        self.pipeline_name = pipeline_name
        self.intra_op_num_threads = intra_op_num_threads
        self.inter_op_num_threads = inter_op_num_threads
        self.enable_cpu_mem_arena = enable_cpu_mem_arena
        self.add_special_tokens = add_special_tokens
        self.max_length = max_length
        self.output_dim = output_dim
        self.providers = tuple(providers)

        self._validate()

    def _validate(self) -> None:
        """Validate configuration parameters.

        Raises:
            ValueError: If configuration parameters are invalid.
        """
        if not self.model_path:
            raise ValueError("model_path cannot be empty")
        if not self.pipeline_name:
            raise ValueError("pipeline_name cannot be empty")
        if self.intra_op_num_threads <= 0:
            raise ValueError(
                f"intra_op_num_threads must be positive, got {self.intra_op_num_threads}"
            )
        if self.inter_op_num_threads <= 0:
            raise ValueError(
                f"inter_op_num_threads must be positive, got {self.inter_op_num_threads}"
            )
        if self.max_length is not None and self.max_length <= 0:
            raise ValueError(f"max_length must be positive, got {self.max_length}")
        if self.output_dim is not None and self.output_dim <= 0:
            raise ValueError(f"output_dim must be positive, got {self.output_dim}")
        if not self.providers:
            raise ValueError("providers cannot be empty")

    @property
    def tokenizer_path(self) -> str:
        """Path of the tokenizer definition."""
        return os.path.join(self.model_path, TOKENIZER_FILE)

    @property
    def model_file(self) -> str:
        """Path of the ONNX model."""
        return os.path.join(self.model_path, MODEL_FILE)

    def tokenizer_kwargs(self) -> Dict[str, Any]:
        """Build the keyword arguments passed to the tokenizer for one text.

        Returns:
            Encode options requesting every aligned array the pipeline keeps.
        """
        kwargs: Dict[str, Any] = {
            "add_special_tokens": self.add_special_tokens,
            "return_token_type_ids": True,
            "return_attention_mask": True,
            "return_special_tokens_mask": True,
            "return_offsets_mapping": True,
        }
        if self.max_length is not None:
            kwargs["truncation"] = True
            kwargs["max_length"] = self.max_length
        return kwargs

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> "PipelineConfig":
        """Create a configuration from a dictionary.

        Args:
            config_dict: Mapping of configuration parameters. Unknown keys
                are ignored.

        Returns:
            PipelineConfig instance.
        """
        return cls(**config_dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to a dictionary.

        Returns:
            Dictionary containing all configuration parameters.
        """
        return {
            "model_path": self.model_path,
            "pipeline_name": self.pipeline_name,
            "intra_op_num_threads": self.intra_op_num_threads,
            "inter_op_num_threads": self.inter_op_num_threads,
            "enable_cpu_mem_arena": self.enable_cpu_mem_arena,
            "add_special_tokens": self.add_special_tokens,
            "max_length": self.max_length,
            "output_dim": self.output_dim,
            "providers": list(self.providers),
        }

    def __repr__(self) -> str:
        return (
            f"PipelineConfig("
            f"model_path='{self.model_path}', "
            f"pipeline_name='{self.pipeline_name}', "
            f"intra_op_num_threads={self.intra_op_num_threads}, "
            f"inter_op_num_threads={self.inter_op_num_threads}, "
            f"enable_cpu_mem_arena={self.enable_cpu_mem_arena}, "
            f"add_special_tokens={self.add_special_tokens}, "
            f"max_length={self.max_length}, "
            f"output_dim={self.output_dim}"
            f")"
        )
