"""
LZW dictionary codec over single-byte characters.

The dictionary is seeded with the 256 single-character strings and gains one
entry per emitted code. With `max_codes` set, it stops growing once full
(freeze mode); encoder and decoder freeze at the same step.

Artifact: one 4-byte big-endian unsigned integer per code, no header.
"""

import struct
from typing import Dict, List, Optional, Sequence

from engines.codec_base import Codec, register_codec
from engines.errors import BadCodeError, CorruptStreamError, EmptyInputError, UnsupportedValueError

SEED_SIZE = 256
CODE_LIMIT = 1 << 32

_CODE = struct.Struct('>I')


def pack_codes(codes: Sequence[int]) -> bytes:
    for code in codes:
        if not 0 <= code < CODE_LIMIT:
            raise UnsupportedValueError(f"Code {code} does not fit in 4 bytes")
    return struct.pack(f'>{len(codes)}I', *codes)


def unpack_codes(artifact: bytes) -> List[int]:
    if len(artifact) % _CODE.size:
        raise CorruptStreamError(
            f"Artifact length {len(artifact)} is not a multiple of {_CODE.size}"
        )
    return list(struct.unpack(f'>{len(artifact) // _CODE.size}I', artifact))


@register_codec
class DictionaryCodec(Codec):
    """LZW compressor: text in, integer codes out."""

    name = 'lzw'

    def __init__(self, max_codes: Optional[int] = None):
        if max_codes is not None and not SEED_SIZE <= max_codes <= CODE_LIMIT:
            raise ValueError(
                f"max_codes must be between {SEED_SIZE} and {CODE_LIMIT}, got {max_codes}"
            )
        self.max_codes = max_codes

    def _can_grow(self, next_code: int) -> bool:
        limit = CODE_LIMIT if self.max_codes is None else self.max_codes
        return next_code < limit

    def compress(self, text: str) -> List[int]:
        if not text:
            raise EmptyInputError("Nothing to compress")

        dictionary: Dict[str, int] = {chr(i): i for i in range(SEED_SIZE)}
        next_code = SEED_SIZE
        codes = []
        w = ''

        for position, c in enumerate(text):
            if ord(c) >= SEED_SIZE:
                raise UnsupportedValueError(
                    f"Character {c!r} (code point {ord(c)}) at position {position} "
                    f"is outside the single-byte alphabet"
                )
            wc = w + c
            if wc in dictionary:
                w = wc
            else:
                codes.append(dictionary[w])
                if self._can_grow(next_code):
                    dictionary[wc] = next_code
                    next_code += 1
                w = c

        if w:
            codes.append(dictionary[w])
        return codes

    def decompress(self, codes: Sequence[int]) -> str:
        if len(codes) == 0:
            raise EmptyInputError("Nothing to decompress")

        first = codes[0]
        if not 0 <= first < SEED_SIZE:
            raise BadCodeError(f"First code must be a seed code (0-255), got {first}")

        dictionary: Dict[int, str] = {i: chr(i) for i in range(SEED_SIZE)}
        next_code = SEED_SIZE
        w = dictionary[first]
        out = [w]

        for k in codes[1:]:
            if k in dictionary:
                entry = dictionary[k]
            elif k == next_code and self._can_grow(next_code):
                # Code used in the same step it was defined
                entry = w + w[0]
            else:
                raise BadCodeError(f"Bad code {k} (next assignable code is {next_code})")

            out.append(entry)
            if self._can_grow(next_code):
                dictionary[next_code] = w + entry[0]
                next_code += 1
            w = entry

        return ''.join(out)

    def compress_to_bytes(self, text: str) -> bytes:
        return pack_codes(self.compress(text))

    def decompress_from_bytes(self, artifact: bytes) -> str:
        return self.decompress(unpack_codes(artifact))
