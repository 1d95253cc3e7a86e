"""
POCSAG pager protocol on the codeword level.

POCSAG (Post Office Code Standardisation Advisory Group) transmits
32-bit words: a systematic BCH(31,21) codeword followed by an even parity
bit. After a preamble of alternating bits, each batch starts with a sync
word and carries 8 frames of 2 codewords each.

Word layout (bit 31 transmitted first):
    31      flag (0 = address, 1 = message)
    30..11  18 address bits + 2 function bits, or 20 message bits
    10..1   BCH parity
    0       even parity

This module works on hard-decision bits or 32-bit words; demodulation
and clock recovery happen upstream.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import Callable, Iterable, List, Optional, Sequence

import numpy as np

from ..core.config import get_preset
from ..fec.bch import BCHCode, CorrectionStatus
from ..utils.bits import even_parity, hamming_distance, words_to_bits

logger = logging.getLogger(__name__)

SYNC_WORD = 0x7CD215D8
IDLE_WORD = 0x7A89C197
WORD_MASK = 0xFFFFFFFF
WORD_BITS = 32
PREAMBLE_BITS = 576
CODEWORDS_PER_BATCH = 16
FRAMES_PER_BATCH = 8
DATA_BITS = 20
MESSAGE_FLAG = 0x100000  # Flag bit of the 21-bit BCH message
MAX_ADDRESS = (1 << 21) - 1

NUMERIC_CHARS = "0123456789*U -)("
NUMERIC_PADDING = " "

# Alphanumeric control characters that terminate a message
ALPHA_TERMINATORS = (0x03, 0x04)

# Display names of the 7-bit control characters
ASCII_ESCAPES = (
    "<NUL>", "<SOH>", "<STX>", "<ETX>", "<EOT>", "<ENQ>", "<ACK>", "<BEL>",
    "<BS>", "<TAB>", "<LF>", "<VT>", "<FF>", "<CR>", "<SO>", "<SI>",
    "<DLE>", "<DC1>", "<DC2>", "<DC3>", "<DC4>", "<NAK>", "<SYN>", "<ETB>",
    "<CAN>", "<EM>", "<SUB>", "<ESC>", "<FS>", "<GS>", "<RS>", "<US>",
)


def escape_ascii(text: str) -> str:
    """Replace 7-bit control characters with their <NAME> tokens."""
    result = []
    for char in text:
        code = ord(char)
        if code < 32:
            result.append(ASCII_ESCAPES[code])
        elif code == 127:
            result.append("<DEL>")
        else:
            result.append(char)
    return "".join(result)


@lru_cache(maxsize=1)
def default_code() -> BCHCode:
    """Shared BCH(31,21) codec used by POCSAG."""
    return BCHCode(get_preset("pocsag").to_bch_config())


class CodewordType(Enum):
    """Decoded POCSAG codeword kinds."""

    ADDRESS = "address"
    MESSAGE = "message"
    IDLE = "idle"
    INVALID = "invalid"


@dataclass(frozen=True)
class POCSAGCodeword:
    """One received 32-bit POCSAG word after BCH correction."""

    type: CodewordType
    word: int  # Corrected 32-bit word
    status: CorrectionStatus
    error_count: int = 0
    parity_ok: bool = True
    address: int = 0  # 21-bit address (ADDRESS only)
    function: int = 0
    data: int = 0  # 20 message bits (MESSAGE only)


@dataclass
class POCSAGMessage:
    """POCSAG decoded message."""

    address: Optional[int]  # None when the address word was lost
    function: int = 0
    message_type: str = "tone"  # "numeric", "alpha", "tone"
    alpha: str = ""
    numeric: str = ""
    valid: bool = True  # No uncorrectable codewords
    corrected_bits: int = 0
    invalid_codewords: int = 0
    parity_errors: int = 0
    timestamp: float = 0.0

    @property
    def content(self) -> str:
        """Message text for the detected message type."""
        if self.message_type == "numeric":
            return self.numeric
        if self.message_type == "alpha":
            return self.alpha
        return ""

    @property
    def display_text(self) -> str:
        """Content with control characters shown as <NAME> tokens."""
        return escape_ascii(self.content)


@dataclass
class POCSAGPage:
    """Page to be transmitted."""

    address: int
    function: int = 3
    content: str = ""
    message_type: str = "alpha"  # "alpha", "numeric", "tone"


def _reverse_bits(value: int, width: int) -> int:
    result = 0
    for _ in range(width):
        result = (result << 1) | (value & 1)
        value >>= 1
    return result


def parse_codeword(
    word: int, position: int, code: Optional[BCHCode] = None
) -> POCSAGCodeword:
    """
    Correct and classify one 32-bit word.

    Args:
        word: Received 32-bit word including the parity bit
        position: Codeword index within the batch (0-15)
        code: BCH(31,21) codec (the POCSAG default when None)

    Returns:
        Classified codeword
    """
    code = code or default_code()
    received = (word & WORD_MASK) >> 1

    if hamming_distance(received, IDLE_WORD >> 1) <= code.t:
        return POCSAGCodeword(
            CodewordType.IDLE, IDLE_WORD, CorrectionStatus.VALID,
            hamming_distance(received, IDLE_WORD >> 1),
        )

    result = code.correct(received)
    if not result.ok:
        return POCSAGCodeword(CodewordType.INVALID, word, result.status)

    corrected = (result.codeword << 1) | (word & 1)
    parity_ok = even_parity(corrected) == 0
    if not parity_ok:
        logger.debug(f"Parity error in word {corrected:#010x}")

    message = code.decode_message(result.codeword)
    if not message & MESSAGE_FLAG:
        return POCSAGCodeword(
            CodewordType.ADDRESS,
            corrected,
            result.status,
            result.error_count,
            parity_ok,
            address=((message >> 2) << 3) | (position // 2),
            function=message & 0x3,
        )

    return POCSAGCodeword(
        CodewordType.MESSAGE,
        corrected,
        result.status,
        result.error_count,
        parity_ok,
        data=message & (MESSAGE_FLAG - 1),
    )


class MessageBuilder:
    """Accumulates address and message codewords into a POCSAGMessage."""

    def __init__(self) -> None:
        self._address: Optional[POCSAGCodeword] = None
        self._data: List[int] = []
        self._corrected_bits = 0
        self._invalid_codewords = 0
        self._parity_errors = 0

    @property
    def is_valid(self) -> bool:
        """True once an address or message data has been seen."""
        return self._address is not None or bool(self._data)

    def _account(self, codeword: POCSAGCodeword) -> None:
        self._corrected_bits += codeword.error_count
        if not codeword.parity_ok:
            self._parity_errors += 1

    def set_address(self, codeword: POCSAGCodeword) -> None:
        self._address = codeword
        self._account(codeword)

    def append_data(self, codeword: POCSAGCodeword) -> None:
        self._data.append(codeword.data)
        self._account(codeword)

    def mark_invalid(self) -> None:
        self._invalid_codewords += 1

    def _data_bits(self) -> List[int]:
        bits = []
        for data in self._data:
            for shift in range(DATA_BITS - 1, -1, -1):
                bits.append((data >> shift) & 1)
        return bits

    def decode_alpha(self) -> str:
        """
        7-bit characters, least significant bit first.

        Control characters are kept as-is (see escape_ascii for display).
        Decoding stops at ETX/EOT; trailing NULs are the zero fill of the
        last codeword and are dropped.
        """
        bits = self._data_bits()
        result = []
        for i in range(0, len(bits) - 6, 7):
            char_code = 0
            for j in range(7):
                char_code |= bits[i + j] << j
            if char_code in ALPHA_TERMINATORS:
                break
            result.append(chr(char_code))
        return "".join(result).rstrip("\x00")

    def decode_numeric(self) -> str:
        """
        4-bit BCD digits, least significant bit first.

        Up to 4 trailing spaces of the last codeword are taken as fill and
        dropped; real trailing spaces in that word cannot be told apart.
        """
        result = []
        for data in self._data:
            for shift in range(DATA_BITS - 4, -1, -4):
                nibble = _reverse_bits((data >> shift) & 0xF, 4)
                result.append(NUMERIC_CHARS[nibble])

        max_fill = DATA_BITS // 4 - 1
        fill = 0
        while fill < max_fill and result and result[-1] == NUMERIC_PADDING:
            result.pop()
            fill += 1
        return "".join(result)

    def build(self, timestamp: float = 0.0) -> POCSAGMessage:
        address = self._address.address if self._address is not None else None
        function = self._address.function if self._address is not None else 0

        if not self._data:
            message_type = "tone"
        elif function == 0:
            message_type = "numeric"
        else:
            message_type = "alpha"

        return POCSAGMessage(
            address=address,
            function=function,
            message_type=message_type,
            alpha=self.decode_alpha(),
            numeric=self.decode_numeric(),
            valid=self._invalid_codewords == 0,
            corrected_bits=self._corrected_bits,
            invalid_codewords=self._invalid_codewords,
            parity_errors=self._parity_errors,
            timestamp=timestamp,
        )


class POCSAGAssembler:
    """
    Turns the word sequence following a sync word into messages.

    Every 17th word is expected to be a sync word; anything else ends
    the transmission.
    """

    def __init__(self, code: Optional[BCHCode] = None):
        self._code = code or default_code()
        self._builder = MessageBuilder()
        self._position = 0
        self._synced = True

    @property
    def synced(self) -> bool:
        return self._synced

    def is_sync(self, word: int) -> bool:
        """Sync word within the code's correction distance (parity ignored)."""
        return hamming_distance((word & WORD_MASK) >> 1, SYNC_WORD >> 1) <= self._code.t

    def push(self, word: int, timestamp: float = 0.0) -> List[POCSAGMessage]:
        """
        Process one 32-bit word.

        Returns:
            Messages completed by this word
        """
        if not self._synced:
            return []

        if self._position == CODEWORDS_PER_BATCH:
            if self.is_sync(word):
                self._position = 0
                return []
            logger.debug("Did not get expected sync codeword, transmission done")
            self._synced = False
            return self.finish(timestamp)

        codeword = parse_codeword(word, self._position, self._code)
        self._position += 1

        messages = []
        if codeword.type is CodewordType.INVALID:
            self._builder.mark_invalid()
        elif codeword.type is CodewordType.ADDRESS:
            messages.extend(self.finish(timestamp))
            self._builder.set_address(codeword)
        elif codeword.type is CodewordType.MESSAGE:
            self._builder.append_data(codeword)
        else:
            messages.extend(self.finish(timestamp))
        return messages

    def finish(self, timestamp: float = 0.0) -> List[POCSAGMessage]:
        """Flush the message under construction, if any."""
        messages = []
        if self._builder.is_valid:
            messages.append(self._builder.build(timestamp))
        self._builder = MessageBuilder()
        return messages

    def reset(self) -> None:
        self._builder = MessageBuilder()
        self._position = 0
        self._synced = True


def decode_batch(
    words: Sequence[int], code: Optional[BCHCode] = None
) -> List[POCSAGMessage]:
    """
    Decode one batch of codewords (the words after a sync word).

    Args:
        words: Up to 16 32-bit words
        code: BCH(31,21) codec (the POCSAG default when None)

    Returns:
        Messages contained in the batch
    """
    assembler = POCSAGAssembler(code)
    messages = []
    for word in words[:CODEWORDS_PER_BATCH]:
        messages.extend(assembler.push(word))
    messages.extend(assembler.finish())
    return messages


def decode_words(
    words: Iterable[int], code: Optional[BCHCode] = None
) -> List[POCSAGMessage]:
    """
    Decode a transmission given as 32-bit words.

    Words before the first sync word are skipped; sync words between
    batches are consumed.
    """
    assembler: Optional[POCSAGAssembler] = None
    messages = []
    for word in words:
        if assembler is None or not assembler.synced:
            if word == SYNC_WORD:
                assembler = POCSAGAssembler(code)
            continue
        messages.extend(assembler.push(word))
    if assembler is not None:
        messages.extend(assembler.finish())
    return messages


class POCSAGDecoder:
    """
    POCSAG decoder for hard-decision bit streams.

    Features:
    - Normal and inverted sync word detection
    - BCH(31,21) error correction of up to 2 bits per codeword
    - Numeric and alphanumeric message decoding
    - Address and function code extraction
    """

    def __init__(self, baud_rate: int = 1200, code: Optional[BCHCode] = None):
        """
        Initialize POCSAG decoder.

        Args:
            baud_rate: Bit rate (512, 1200, or 2400), used for timestamps
            code: BCH(31,21) codec (the POCSAG default when None)
        """
        if baud_rate <= 0:
            raise ValueError(f"baud_rate must be positive, got {baud_rate}")

        self._baud_rate = baud_rate
        self._code = code or default_code()
        self._callbacks: List[Callable[[POCSAGMessage], None]] = []

        # State machine
        self._state = "searching"  # searching, synced
        self._shift_register = 0
        self._bits_seen = 0
        self._word = 0
        self._word_bits = 0
        self._inverted = 0
        self._assembler = POCSAGAssembler(self._code)
        self._bit_count = 0

    @property
    def baud_rate(self) -> int:
        return self._baud_rate

    @property
    def state(self) -> str:
        return self._state

    @property
    def inverted(self) -> bool:
        """True when the stream was found to be polarity-inverted."""
        return bool(self._inverted)

    def add_callback(self, callback: Callable[[POCSAGMessage], None]) -> None:
        """Add callback for decoded messages."""
        self._callbacks.append(callback)

    def remove_callback(self, callback: Callable) -> None:
        """Remove callback."""
        if callback in self._callbacks:
            self._callbacks.remove(callback)

    def _notify_callbacks(self, message: POCSAGMessage) -> None:
        for callback in self._callbacks:
            try:
                callback(message)
            except Exception:
                logger.exception("POCSAG message callback failed")

    @property
    def _timestamp(self) -> float:
        return self._bit_count / self._baud_rate

    def _search(self, bit: int) -> None:
        self._shift_register = ((self._shift_register << 1) | bit) & WORD_MASK
        self._bits_seen += 1
        if self._bits_seen < WORD_BITS:
            return

        if self._shift_register == SYNC_WORD:
            logger.debug("Sync...")
        elif self._shift_register == SYNC_WORD ^ WORD_MASK:
            logger.debug("Inverted sync detected, inverting all other bits")
            self._inverted = 1
        else:
            return

        self._state = "synced"
        self._word = 0
        self._word_bits = 0
        self._assembler.reset()

    def _receive(self, bit: int) -> List[POCSAGMessage]:
        self._word = (self._word << 1) | bit
        self._word_bits += 1
        if self._word_bits < WORD_BITS:
            return []

        word = self._word
        self._word = 0
        self._word_bits = 0

        messages = self._assembler.push(word, self._timestamp)
        if not self._assembler.synced:
            self._lose_sync()
        return messages

    def _lose_sync(self) -> None:
        self._state = "searching"
        self._shift_register = 0
        self._bits_seen = 0
        self._inverted = 0

    def decode(self, bits: Sequence[int]) -> List[POCSAGMessage]:
        """
        Decode hard-decision bits.

        Args:
            bits: 0/1 values in transmission order (numpy array or sequence)

        Returns:
            Messages completed within these bits
        """
        messages: List[POCSAGMessage] = []
        for raw in np.asarray(bits, dtype=np.uint8):
            self._bit_count += 1
            bit = (int(raw) & 1) ^ self._inverted
            if self._state == "searching":
                self._search(bit)
            else:
                messages.extend(self._receive(bit))

        for message in messages:
            self._notify_callbacks(message)
        return messages

    def flush(self) -> List[POCSAGMessage]:
        """Emit the message under construction at the end of the input."""
        messages = []
        if self._state == "synced":
            messages = self._assembler.finish(self._timestamp)
            self._lose_sync()
        for message in messages:
            self._notify_callbacks(message)
        return messages

    def reset(self) -> None:
        """Reset decoder state."""
        self._lose_sync()
        self._word = 0
        self._word_bits = 0
        self._assembler.reset()
        self._bit_count = 0


class POCSAGEncoder:
    """Builds POCSAG transmissions from pages."""

    def __init__(self, code: Optional[BCHCode] = None):
        self._code = code or default_code()

    def encode_codeword(self, message: int) -> int:
        """21-bit message -> 32-bit word with even parity."""
        codeword = self._code.encode_message(message)
        return (codeword << 1) | even_parity(codeword)

    def address_word(self, address: int, function: int) -> int:
        if not (0 <= address <= MAX_ADDRESS):
            raise ValueError(f"address must be between 0 and {MAX_ADDRESS}, got {address}")
        if not (0 <= function <= 3):
            raise ValueError(f"function must be between 0 and 3, got {function}")
        return self.encode_codeword(((address >> 3) << 2) | function)

    def message_words(self, content: str, message_type: str) -> List[int]:
        """Message codewords for alphanumeric or numeric content."""
        if message_type == "tone":
            return []
        if message_type == "alpha":
            bits = []
            for char in content:
                code = ord(char)
                if code > 0x7F:
                    raise ValueError(f"Character {char!r} is not 7-bit ASCII")
                if code in ALPHA_TERMINATORS:
                    raise ValueError(f"Character {char!r} terminates alphanumeric pages")
                bits.extend((code >> j) & 1 for j in range(7))
        elif message_type == "numeric":
            bits = []
            digits = content + NUMERIC_PADDING * (-len(content) % (DATA_BITS // 4))
            for char in digits:
                index = NUMERIC_CHARS.find(char)
                if index < 0:
                    raise ValueError(f"Character {char!r} is not valid in numeric pages")
                nibble = _reverse_bits(index, 4)
                bits.extend((nibble >> shift) & 1 for shift in range(3, -1, -1))
        else:
            raise ValueError(f"Unknown message type: {message_type}")

        bits.extend([0] * (-len(bits) % DATA_BITS))
        words = []
        for i in range(0, len(bits), DATA_BITS):
            data = 0
            for bit in bits[i:i + DATA_BITS]:
                data = (data << 1) | bit
            words.append(self.encode_codeword(MESSAGE_FLAG | data))
        return words

    def encode_words(self, pages: Iterable[POCSAGPage]) -> List[int]:
        """
        Lay out pages into batches.

        Returns:
            32-bit words, each batch preceded by a sync word
        """
        words: List[int] = []
        position = CODEWORDS_PER_BATCH

        def emit(word: int) -> None:
            nonlocal position
            if position == CODEWORDS_PER_BATCH:
                words.append(SYNC_WORD)
                position = 0
            words.append(word)
            position += 1

        for page in pages:
            # Address words may only go in the frame selected by the low 3 bits
            slot = 2 * (page.address & 0x7)
            if slot < position < CODEWORDS_PER_BATCH:
                while position < CODEWORDS_PER_BATCH:
                    emit(IDLE_WORD)
            if position == CODEWORDS_PER_BATCH:
                words.append(SYNC_WORD)
                position = 0
            while position < slot:
                emit(IDLE_WORD)

            emit(self.address_word(page.address, page.function))
            for word in self.message_words(page.content, page.message_type):
                emit(word)

        while position != CODEWORDS_PER_BATCH:
            emit(IDLE_WORD)
        return words

    def encode_bits(
        self, pages: Iterable[POCSAGPage], preamble_bits: int = PREAMBLE_BITS
    ) -> np.ndarray:
        """Full transmission: preamble followed by sync and batches."""
        preamble = np.tile(np.array([1, 0], dtype=np.uint8), (preamble_bits + 1) // 2)
        return np.concatenate(
            [preamble[:preamble_bits], words_to_bits(self.encode_words(pages))]
        )
