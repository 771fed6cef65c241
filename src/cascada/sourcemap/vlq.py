"""Base64 VLQ codec used by the ``mappings`` field of source maps.

Each integer is split into 5-bit groups, least significant first, with the
sign stored in the lowest bit of the first group. Bit 6 of every digit
marks a continuation.

Example:
    >>> encode(16)
    'gB'
    >>> decode("AACgB")
    [0, 0, 1, 16]
"""

_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"
_DIGITS = {char: i for i, char in enumerate(_ALPHABET)}

_SHIFT = 5
_BASE = 1 << _SHIFT
_MASK = _BASE - 1
_CONTINUATION = _BASE


def encode(value: int) -> str:
    """Encode a signed integer as base64 VLQ."""
    vlq = (-value << 1) | 1 if value < 0 else value << 1
    out = []
    while True:
        digit = vlq & _MASK
        vlq >>= _SHIFT
        if vlq:
            digit |= _CONTINUATION
        out.append(_ALPHABET[digit])
        if not vlq:
            return "".join(out)


def decode(segment: str) -> list[int]:
    """Decode every integer in a base64 VLQ segment.

    Raises:
        ValueError: On a character outside the base64 alphabet or a
            truncated trailing value.
    """
    values: list[int] = []
    vlq = 0
    shift = 0
    for char in segment:
        digit = _DIGITS.get(char)
        if digit is None:
            msg = f"Invalid base64 VLQ digit: {char!r}"
            raise ValueError(msg)
        vlq |= (digit & _MASK) << shift
        if digit & _CONTINUATION:
            shift += _SHIFT
            continue
        values.append(-(vlq >> 1) if vlq & 1 else vlq >> 1)
        vlq = 0
        shift = 0
    if shift:
        msg = f"Truncated base64 VLQ segment: {segment!r}"
        raise ValueError(msg)
    return values
