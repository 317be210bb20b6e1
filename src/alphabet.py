import logging

import numpy as np
from numba import njit

logger = logging.getLogger(__name__)

BASES = "ACGT"
SENTINEL = 255
TABLE_SIZE = 256


def create_alphabet_map(bases=BASES, sentinel=SENTINEL):
    """
    Create lookup table mapping 8-bit character codes to base codes.
    bases[i] and its lowercase variant get code i; every other entry holds the sentinel.
    Returns: np.ndarray of shape (256,) with uint8 values
    """
    if not bases or len(bases) > 4:
        raise ValueError(f"Expected 1 to 4 bases for 2-bit codes, got {len(bases)}: {bases!r}")
    if isinstance(sentinel, bool) or not isinstance(sentinel, (int, np.integer)):
        raise ValueError(f"Sentinel must be an integer, got {sentinel!r}")
    if not 0 <= sentinel < TABLE_SIZE:
        raise ValueError(f"Sentinel must fit in uint8, got {sentinel}")
    if sentinel < len(bases):
        raise ValueError(f"Sentinel {sentinel} aliases a valid base code")

    alphabet_map = np.full(TABLE_SIZE, sentinel, dtype=np.uint8)
    seen = set()
    for code, base in enumerate(bases):
        # Both case variants are written, so both must be 8-bit characters
        variants = (base, base.upper(), base.lower())
        if any(len(v) != 1 or ord(v) >= TABLE_SIZE for v in variants):
            raise ValueError(f"Base {base!r} is not a single 8-bit character in both cases")
        if base.upper() in seen:
            raise ValueError(f"Duplicate base {base!r}")
        seen.add(base.upper())
        alphabet_map[ord(base.upper())] = code
        alphabet_map[ord(base.lower())] = code

    logger.debug(f"Built alphabet map for {bases} (sentinel={sentinel})")
    return alphabet_map


ALPHABET_ENCODINGS = create_alphabet_map()
ALPHABET_ENCODINGS.flags.writeable = False


def encode_char(character: str) -> int:
    """Return the code of one character: A/C/G/T (any case) -> 0..3, anything else -> 255."""
    code = ord(character)
    if code >= TABLE_SIZE:
        return SENTINEL
    return int(ALPHABET_ENCODINGS[code])


def encode_bytes(buffer) -> np.ndarray:
    """
    Map a buffer of character codes through the alphabet table.
    Accepts bytes-like objects or integer arrays; array values outside 0..255 map to the sentinel.
    """
    if len(buffer) == 0:
        return np.zeros((0,), dtype=np.uint8)
    if not isinstance(buffer, np.ndarray):
        return ALPHABET_ENCODINGS[np.frombuffer(buffer, dtype=np.uint8)]
    if buffer.dtype == np.uint8:
        return ALPHABET_ENCODINGS[buffer]

    # Wider integers are never wrapped into the table domain
    in_range = (buffer >= 0) & (buffer < TABLE_SIZE)
    mapped = ALPHABET_ENCODINGS[np.clip(buffer, 0, TABLE_SIZE - 1)]
    return np.where(in_range, mapped, SENTINEL).astype(np.uint8)


@njit
def _encode_code_points(code_points, table, sentinel):
    result = np.empty(code_points.shape[0], dtype=np.uint8)
    for i in range(code_points.shape[0]):
        val = code_points[i]
        # Code points past the table are never indexed
        if val >= table.shape[0]:
            result[i] = sentinel
        else:
            result[i] = table[val]
    return result


def encode_sequence(sequence: str) -> np.ndarray:
    """
    Encode every character of a string.
    Element i equals encode_char(sequence[i]); code points above 255 become the sentinel.
    """
    if not sequence:
        return np.zeros((0,), dtype=np.uint8)
    # surrogatepass keeps lone surrogates (valid in str) as their code points
    code_points = np.frombuffer(sequence.encode("utf-32-le", "surrogatepass"), dtype=np.uint32)
    return _encode_code_points(code_points, ALPHABET_ENCODINGS, np.uint8(SENTINEL))
