# csv_helper/csv_encoding.py
"""
CSV Encoding Detection and Codec Resolution

Detects byte-order marks, builds the list of candidate encodings for the
format heuristic (BOM, strict UTF-8, chardet hint, legacy fallbacks) and
resolves a configured encoding into the concrete codec and code-unit width
the reader scans with.
"""
import codecs
import logging
from functools import lru_cache
from typing import List, NamedTuple, Optional, Sequence

import chardet

from tabletool.core.processor.csv_helper.csv_configuration import normalize_encoding
from tabletool.core.processor.csv_helper.csv_constants import (
    CHARDET_MIN_CONFIDENCE,
    CHARDET_SAMPLE_SIZE,
    LEGACY_ENCODING_CANDIDATES,
    MAX_LEGACY_ENCODINGS,
    SINGLE_BYTE_ENCODINGS,
)

logger = logging.getLogger("table-tool")

# BOM markers (longest first: the UTF-32 LE mark starts with the UTF-16 LE one)
BOM_UTF32_LE = b'\xff\xfe\x00\x00'
BOM_UTF32_BE = b'\x00\x00\xfe\xff'
BOM_UTF8 = b'\xef\xbb\xbf'
BOM_UTF16_LE = b'\xff\xfe'
BOM_UTF16_BE = b'\xfe\xff'

_BOMS = [
    (BOM_UTF32_LE, 'utf-32-le'),
    (BOM_UTF32_BE, 'utf-32-be'),
    (BOM_UTF8, 'utf-8'),
    (BOM_UTF16_LE, 'utf-16-le'),
    (BOM_UTF16_BE, 'utf-16-be'),
]


class ResolvedCodec(NamedTuple):
    """
    Concrete codec used to scan and decode a buffer.

    ``multibyte`` marks legacy codecs (GBK, Shift_JIS, Big5, ...) whose trail
    bytes can equal ASCII separators or escapes; those buffers are scanned
    one whole character at a time.
    """
    codec: str
    bom_length: int
    unit_size: int
    multibyte: bool = False


def detect_bom(data: bytes) -> Optional[str]:
    """
    Detect a BOM (Byte Order Mark).

    Args:
        data: Binary file data

    Returns:
        Endian-specific codec of the BOM, or None
    """
    for bom, codec in _BOMS:
        if data.startswith(bom):
            return codec
    return None


def bom_family(data: bytes) -> Optional[str]:
    """
    Return the configuration-level encoding implied by a BOM.

    The BOM is kept in the encoding name so that writing the document back
    reproduces it.

    Args:
        data: Binary file data

    Returns:
        "utf-8-sig", "utf-16", "utf-32" or None
    """
    codec = detect_bom(data)
    if codec is None:
        return None
    if codec == 'utf-8':
        return 'utf-8-sig'
    return codec[:6]


def decodes(data: bytes, encoding: str) -> bool:
    """Return True when data decodes strictly under encoding."""
    try:
        data.decode(encoding)
        return True
    except (UnicodeDecodeError, LookupError):
        return False


def guess_legacy_encoding(data: bytes) -> Optional[str]:
    """
    Ask chardet for a single-byte encoding guess.

    Args:
        data: Binary file data

    Returns:
        Normalized codec name when chardet is confident and the guess is a
        supported single-byte encoding, otherwise None
    """
    detected = chardet.detect(data[:CHARDET_SAMPLE_SIZE])
    if not detected or not detected.get('encoding'):
        return None

    confidence = detected.get('confidence') or 0
    guess = normalize_encoding(detected['encoding'])
    logger.debug(f"chardet detected: {guess} (confidence: {confidence})")

    if confidence > CHARDET_MIN_CONFIDENCE and guess in SINGLE_BYTE_ENCODINGS:
        return guess
    return None


def detect_encoding_candidates(
    data: bytes,
    legacy_encodings: Optional[Sequence[str]] = None,
    use_chardet: bool = True
) -> List[str]:
    """
    Build the ordered list of candidate encodings.

    Detection order:
    1. BOM (short-circuit: the BOM family is the only candidate)
    2. Strict UTF-8
    3. chardet single-byte guess (if confident)
    4. Legacy fallbacks in priority order (at most two legacy candidates)

    Args:
        data: Binary file data
        legacy_encodings: Override of the legacy fallback list
        use_chardet: Whether to consult chardet

    Returns:
        Candidate encodings; empty when nothing decodes strictly
    """
    bom_encoding = bom_family(data)
    if bom_encoding:
        logger.debug(f"BOM detected: {bom_encoding}")
        return [bom_encoding]

    candidates = []
    if decodes(data, 'utf-8'):
        candidates.append('utf-8')

    legacy = []
    if use_chardet:
        guess = guess_legacy_encoding(data)
        if guess:
            legacy.append(guess)
    for enc in legacy_encodings or LEGACY_ENCODING_CANDIDATES:
        enc = normalize_encoding(enc)
        if enc not in legacy:
            legacy.append(enc)

    kept = 0
    for enc in legacy:
        if kept >= MAX_LEGACY_ENCODINGS:
            break
        if decodes(data, enc):
            candidates.append(enc)
            kept += 1
        else:
            logger.debug(f"Legacy encoding {enc} failed")

    return candidates


@lru_cache(maxsize=None)
def is_multibyte_codec(codec: str) -> bool:
    """
    Check whether a legacy codec has multi-byte characters.

    A high byte that does not decode on its own but starts a decodable
    two-byte character marks a multi-byte codec. Single-byte codecs with
    undefined bytes (cp1252 0x81, ...) never decode such a pair.

    Args:
        codec: Concrete codec name

    Returns:
        True for codecs like gbk, big5 or shift_jis
    """
    for lead in range(0x80, 0x100):
        if decodes(bytes([lead]), codec):
            continue
        for trail in range(0x40, 0x100):
            pair = bytes([lead, trail])
            if decodes(pair, codec) and len(pair.decode(codec)) == 1:
                return True
    return False


def resolve_codec(data: bytes, encoding: str) -> ResolvedCodec:
    """
    Resolve a configured encoding into the codec the reader scans with.

    BOM-carrying encodings are pinned to the byte order of the BOM (little
    endian when absent) and the BOM is skipped. A "utf-8" buffer that starts
    with a UTF-8 BOM also has the BOM skipped.

    Args:
        data: Binary file data
        encoding: Configured encoding name

    Returns:
        ResolvedCodec(codec, bom_length, unit_size, multibyte)

    Raises:
        LookupError: If the encoding is unknown
    """
    name = codecs.lookup(encoding).name
    bom_codec = detect_bom(data)

    if name in ('utf-8', 'utf-8-sig'):
        bom_length = len(BOM_UTF8) if bom_codec == 'utf-8' else 0
        return ResolvedCodec('utf-8', bom_length, 1)

    for family, unit_size in (('utf-16', 2), ('utf-32', 4)):
        if name == family:
            if bom_codec and bom_codec.startswith(family):
                return ResolvedCodec(bom_codec, unit_size, unit_size)
            return ResolvedCodec(f'{family}-le', 0, unit_size)
        if name.startswith(family):
            return ResolvedCodec(name, 0, unit_size)

    return ResolvedCodec(name, 0, 1, is_multibyte_codec(name))


def encode_unit(char: str, codec: str) -> bytes:
    """
    Encode a single control character into its code-unit bytes.

    Characters that do not fit in one code unit (or cannot be encoded) are
    returned as an empty bytes object, which never matches a unit.

    Args:
        char: One character
        codec: Concrete codec from resolve_codec()

    Returns:
        Encoded bytes of exactly one code unit, or b""
    """
    try:
        return char.encode(codec)
    except UnicodeEncodeError:
        return b""


def decode_field(raw: bytes, codec: str) -> str:
    """
    Decode the bytes of one field.

    Invalid sequences yield an empty string instead of failing the row.

    Args:
        raw: Field bytes
        codec: Concrete codec

    Returns:
        Decoded field text
    """
    try:
        return raw.decode(codec)
    except UnicodeDecodeError:
        logger.debug(f"Undecodable field under {codec}: {raw[:20]!r}")
        return ""


__all__ = [
    "ResolvedCodec",
    "detect_bom",
    "bom_family",
    "decodes",
    "guess_legacy_encoding",
    "detect_encoding_candidates",
    "is_multibyte_codec",
    "resolve_codec",
    "encode_unit",
    "decode_field",
]
