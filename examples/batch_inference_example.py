"""
Example running batched inference with a Pipeline.

The model directory must contain tokenizer.json and model.onnx, for example
an ONNX export of a BERT-style encoder whose first output is
last_hidden_state with shape [batch, sequence, hidden].
"""

import logging
import sys

from ort_pipelines_lite import Pipeline, PipelineConfig
from ort_pipelines_lite.utils import setup_logger

model_path = sys.argv[1] if len(sys.argv) > 1 else "./models/all-MiniLM-L6-v2"

setup_logger(level=logging.INFO)

config = PipelineConfig(model_path=model_path, pipeline_name="embeddings")

with Pipeline.from_config(config) as pipeline:
    texts = [
        "The capital of France is Paris.",
        "Hello world",
        "Batches are padded to the longest input.",
    ]

    print("\nRunning batch...")
    batch = pipeline.run(texts)

    output = batch.output_view(pipeline.get_output_dim())
    print(f"  Input shape: {batch.input_shape}")
    print(f"  Output shape: {tuple(output.shape)}")

    for record, row in zip(batch.input, output):
        first_token = row[0, :4].tolist()
        print(f"  {record.raw!r}: {record.effective_length} tokens, first values {first_token}")

    print("\nTimings:")
    for stage, stats in pipeline.get_stats().items():
        print(f"  {stage}: {stats.num_calls} call(s), average {stats.average_ns / 1e6:.3f} ms")
