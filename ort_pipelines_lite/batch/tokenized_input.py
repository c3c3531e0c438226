"""
Tokenized input records.

A TokenizedInput holds the aligned arrays the tokenizer produced for one
input string, together with the index of its last attended token.
"""

from dataclasses import dataclass, field
from typing import Any, List, Sequence, Tuple


def compute_max_attention_index(attention_mask: Sequence[int]) -> int:
    """Return the highest index whose attention mask value is non-zero.

    Args:
        attention_mask: Attention mask of one tokenized sequence.

    Returns:
        Index of the last attended token, or 0 if no token is attended.
    """
    max_attention_index = 0
    for j, value in enumerate(attention_mask):
        if value != 0:
            max_attention_index = j
    return max_attention_index


@dataclass
class TokenizedInput:
    """Tokenizer output for a single input string.

    Attributes:
        raw: Original input text.
        tokens: Token strings.
        token_ids: Token ids, one per token.
        type_ids: Token type ids, aligned with token_ids.
        attention_mask: 1 for real tokens, 0 for padding.
        special_tokens_mask: 1 for special tokens added by the tokenizer.
        offsets: (start, end) character offsets of each token in raw.
        max_attention_index: Index of the last attended token.
    """

    raw: str
    token_ids: List[int]
    tokens: List[str] = field(default_factory=list)
    type_ids: List[int] = field(default_factory=list)
    attention_mask: List[int] = field(default_factory=list)
    special_tokens_mask: List[int] = field(default_factory=list)
    offsets: List[Tuple[int, int]] = field(default_factory=list)
    max_attention_index: int = 0

    @property
    def effective_length(self) -> int:
        """Number of columns this record needs in a batch tensor."""
        return self.max_attention_index + 1

    @classmethod
    def from_encoding(cls, raw: str, encoding: Any) -> "TokenizedInput":
        """Build a record from a single-sequence tokenizer encoding.

        Args:
            raw: Text that was encoded.
            encoding: Mapping with ``input_ids``, ``token_type_ids``,
                ``attention_mask``, ``special_tokens_mask`` and
                ``offset_mapping`` keys, as returned by a transformers fast
                tokenizer. A ``tokens()`` method is used when available.

        Returns:
            TokenizedInput with max_attention_index derived from the mask.
        """
        token_ids = list(encoding["input_ids"])
        attention_mask = list(encoding.get("attention_mask") or [])
        tokens = list(encoding.tokens()) if hasattr(encoding, "tokens") else []

        return cls(
            raw=raw,
            tokens=tokens,
            token_ids=token_ids,
            type_ids=list(encoding.get("token_type_ids") or []),
            attention_mask=attention_mask,
            special_tokens_mask=list(encoding.get("special_tokens_mask") or []),
            offsets=[tuple(offset) for offset in encoding.get("offset_mapping") or []],
            max_attention_index=compute_max_attention_index(attention_mask),
        )
