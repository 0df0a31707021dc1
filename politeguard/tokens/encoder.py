"""Text to fixed-shape model input.

The encoder lower-cases the text, splits it on whitespace and a small
punctuation set, maps each piece through ``HashedVocab`` and frames the
ids BERT-style::

    [CLS] tok_1 ... tok_k [SEP] [PAD] ... [PAD]

The output always has exactly ``max_length`` positions. Text that does not
fit is cut so that the separator still lands inside the window. Encoding
never raises; empty text produces ``[CLS] [SEP]`` followed by padding.
"""

from __future__ import annotations

import re

from ..config.encoder import (
    CLS_TOKEN_ID,
    PAD_TOKEN_ID,
    POLITE_MAX_LENGTH,
    SEP_TOKEN_ID,
    SPLIT_CHARACTERS,
)
from ..state import EncodedInput
from .vocab import HashedVocab

_SPLIT_RE = re.compile("[" + re.escape(SPLIT_CHARACTERS) + "]+")

# [CLS] and [SEP] always fit.
_MIN_LENGTH = 2


def split_words(text: str) -> list[str]:
    """Lower-case and split on whitespace/punctuation, dropping empty pieces."""
    return [piece for piece in _SPLIT_RE.split(text.lower()) if piece]


def encode(text: str, max_length: int = POLITE_MAX_LENGTH, *, vocab: HashedVocab | None = None) -> EncodedInput:
    """Encode ``text`` into ``max_length`` ids plus attention and segment masks.

    Args:
        text: Raw input text (may be empty).
        max_length: Fixed output length; values below 2 are raised to 2.
        vocab: Lookup table; defaults to the special-token table.

    Returns:
        EncodedInput whose three sequences all have length ``max_length``.
    """
    length = max(_MIN_LENGTH, int(max_length))
    lookup = vocab if vocab is not None else HashedVocab()

    ids = [CLS_TOKEN_ID]
    for word in split_words(text or ""):
        if len(ids) >= length - 1:
            break
        ids.append(lookup.token_id(word))
    ids.append(SEP_TOKEN_ID)

    attended = len(ids)
    padding = length - attended
    return EncodedInput(
        input_ids=tuple(ids) + (PAD_TOKEN_ID,) * padding,
        attention_mask=(1,) * attended + (0,) * padding,
        token_type_ids=(0,) * length,
    )


class Encoder:
    """Encoder bound to a fixed sequence length and vocabulary."""

    def __init__(self, max_length: int = POLITE_MAX_LENGTH, vocab: HashedVocab | None = None) -> None:
        self.max_length = max(_MIN_LENGTH, int(max_length))
        self._vocab = vocab if vocab is not None else HashedVocab()

    def encode(self, text: str) -> EncodedInput:
        return encode(text, self.max_length, vocab=self._vocab)

    def __call__(self, text: str) -> EncodedInput:
        return self.encode(text)


__all__ = ["Encoder", "encode", "split_words"]
