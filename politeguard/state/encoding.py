"""Encoder output dataclass."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class EncodedInput:
    """Fixed-length model input for a single text.

    Attributes:
        input_ids: Token ids, begin sentinel first, separator after the last
            real token, pad ids after that.
        attention_mask: 1 up to and including the separator, 0 for padding.
        token_type_ids: Segment ids, all zero for single-sequence input.
    """

    input_ids: tuple[int, ...]
    attention_mask: tuple[int, ...]
    token_type_ids: tuple[int, ...]

    def __len__(self) -> int:
        return len(self.input_ids)

    @property
    def real_length(self) -> int:
        """Number of attended positions (begin + tokens + separator)."""
        return sum(self.attention_mask)


__all__ = ["EncodedInput"]
