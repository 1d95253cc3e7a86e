"""
Protocol module - Codeword-level protocol layers built on the FEC codecs.
"""

from .pocsag import (
    IDLE_WORD,
    SYNC_WORD,
    CodewordType,
    MessageBuilder,
    POCSAGAssembler,
    POCSAGCodeword,
    POCSAGDecoder,
    POCSAGEncoder,
    POCSAGMessage,
    POCSAGPage,
    decode_batch,
    decode_words,
    default_code,
    escape_ascii,
    parse_codeword,
)

__all__ = [
    "IDLE_WORD",
    "SYNC_WORD",
    "CodewordType",
    "MessageBuilder",
    "POCSAGAssembler",
    "POCSAGCodeword",
    "POCSAGDecoder",
    "POCSAGEncoder",
    "POCSAGMessage",
    "POCSAGPage",
    "decode_batch",
    "decode_words",
    "default_code",
    "escape_ascii",
    "parse_codeword",
]
