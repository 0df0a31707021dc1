"""Encoder configuration.

The encoder is a coarse whitespace/punctuation splitter, not a sub-word
tokenizer. Ids for words outside the special-token table come from a
folded character hash, so collisions between unrelated words are expected.

Environment Variables:
    POLITE_MAX_LENGTH: Fixed sequence length fed to the model (default: 512)
"""

from __future__ import annotations

from ..helpers.env import env_int


# ============================================================================
# Sequence Shape
# ============================================================================

POLITE_MAX_LENGTH = env_int("POLITE_MAX_LENGTH", 512)

# ============================================================================
# Special Tokens
# ============================================================================
# BERT-compatible ids so the exported checkpoint sees familiar sentinels.

PAD_TOKEN = "[PAD]"
UNK_TOKEN = "[UNK]"
CLS_TOKEN = "[CLS]"
SEP_TOKEN = "[SEP]"

PAD_TOKEN_ID = 0
UNK_TOKEN_ID = 100
CLS_TOKEN_ID = 101
SEP_TOKEN_ID = 102

SPECIAL_TOKEN_IDS: dict[str, int] = {
    PAD_TOKEN: PAD_TOKEN_ID,
    UNK_TOKEN: UNK_TOKEN_ID,
    CLS_TOKEN: CLS_TOKEN_ID,
    SEP_TOKEN: SEP_TOKEN_ID,
}

# ============================================================================
# Fallback Hashing
# ============================================================================

HASH_MULTIPLIER = 31
HASH_VOCAB_SIZE = 30000
HASH_MIN_TOKEN_ID = 200

# Characters that separate words in addition to whitespace.
SPLIT_CHARACTERS = " .,!?;:\n\r\t"


__all__ = [
    "POLITE_MAX_LENGTH",
    "PAD_TOKEN",
    "UNK_TOKEN",
    "CLS_TOKEN",
    "SEP_TOKEN",
    "PAD_TOKEN_ID",
    "UNK_TOKEN_ID",
    "CLS_TOKEN_ID",
    "SEP_TOKEN_ID",
    "SPECIAL_TOKEN_IDS",
    "HASH_MULTIPLIER",
    "HASH_VOCAB_SIZE",
    "HASH_MIN_TOKEN_ID",
    "SPLIT_CHARACTERS",
]
