"""
Bit-packed Huffman codec over signed 16-bit integer symbols.

Artifact layout:
    [pre-order tree][4-byte symbol count][4-byte payload length][payload]

Tree leaves carry the symbol as a 2-byte big-endian signed integer. Payload bits
are packed least-significant bit first inside each byte.
"""

import struct
from typing import List, Optional, Sequence

import numpy as np

from engines.codec_base import Codec, register_codec
from engines.errors import CorruptStreamError, EmptyInputError, UnsupportedValueError
from engines.prefix_tree import (
    build_code_table,
    build_tree,
    deserialize_tree,
    frequency_table,
    serialize_tree,
)
from utils.constants import SYMBOL_MAX, SYMBOL_MIN

_SYMBOL = struct.Struct('>h')
_UINT32 = struct.Struct('>I')


def _write_symbol(value: int) -> bytes:
    return _SYMBOL.pack(value)


def _read_symbol(raw: bytes) -> int:
    return _SYMBOL.unpack(raw)[0]


def _check_symbols(values: Sequence[int]) -> List[int]:
    checked = []
    for value in values:
        if isinstance(value, (bool, np.bool_)) or not isinstance(value, (int, np.integer)):
            raise UnsupportedValueError(f"Symbol must be an integer, got {value!r}")
        value = int(value)
        if not SYMBOL_MIN <= value <= SYMBOL_MAX:
            raise UnsupportedValueError(
                f"Symbol {value} outside [{SYMBOL_MIN}, {SYMBOL_MAX}]"
            )
        checked.append(value)
    return checked


def pack_bits(bits: str) -> bytes:
    """Pack a '0'/'1' string into bytes, LSB first."""
    if not bits:
        return b''
    arr = np.frombuffer(bits.encode('ascii'), dtype=np.uint8) - ord('0')
    return np.packbits(arr, bitorder='little').tobytes()


def unpack_bits(payload: bytes) -> np.ndarray:
    """Inverse of `pack_bits`; trailing pad bits are kept."""
    return np.unpackbits(np.frombuffer(payload, dtype=np.uint8), bitorder='little')


@register_codec
class BitstreamPrefixCodec(Codec):
    """Huffman coder for sequences of small integers."""

    name = 'huffman'

    def encode(self, values: Sequence[int]) -> bytes:
        values = _check_symbols(values)
        if not values:
            raise EmptyInputError("Nothing to encode")
        if len(values) > 0xFFFFFFFF:
            raise UnsupportedValueError("Too many symbols for a 4-byte count")

        root = build_tree(frequency_table(values))
        codes = build_code_table(root)

        payload = pack_bits(''.join(codes[v] for v in values))
        return b''.join([
            serialize_tree(root, _write_symbol),
            _UINT32.pack(len(values)),
            _UINT32.pack(len(payload)),
            payload,
        ])

    def decode(self, artifact: bytes, max_count: Optional[int] = None) -> List[int]:
        """Decode an artifact; `max_count` rejects declared counts above it as corrupt."""
        artifact = bytes(artifact)
        if not artifact:
            raise EmptyInputError("Nothing to decode")

        root, offset = deserialize_tree(artifact, 0, _SYMBOL.size, _read_symbol)

        if offset + 2 * _UINT32.size > len(artifact):
            raise CorruptStreamError("Symbol count or payload length is truncated")
        count = _UINT32.unpack_from(artifact, offset)[0]
        offset += _UINT32.size
        if max_count is not None and count > max_count:
            raise CorruptStreamError(f"Symbol count {count} exceeds the limit of {max_count}")
        payload_len = _UINT32.unpack_from(artifact, offset)[0]
        offset += _UINT32.size
        payload = artifact[offset:offset + payload_len]
        if len(payload) != payload_len:
            raise CorruptStreamError(
                f"Payload truncated: expected {payload_len} bytes, got {len(payload)}"
            )
        if offset + payload_len != len(artifact):
            raise CorruptStreamError(
                f"{len(artifact) - offset - payload_len} unexpected trailing bytes"
            )

        # Single-leaf tree: every occurrence is zero bits long
        if root.is_leaf:
            return [root.symbol] * count
        if count > len(payload) * 8:
            raise CorruptStreamError(
                f"Symbol count {count} exceeds the {len(payload) * 8} payload bits"
            )

        output = []
        node = root
        for bit in unpack_bits(payload).tolist():
            if len(output) == count:
                break
            node = node.right if bit else node.left
            if node.is_leaf:
                output.append(node.symbol)
                node = root

        if len(output) < count:
            raise CorruptStreamError(
                f"Bitstream ended after {len(output)} of {count} symbols"
            )
        return output

    def compress(self, data: Sequence[int]) -> bytes:
        return self.encode(data)

    def decompress(self, artifact: bytes) -> List[int]:
        return self.decode(artifact)
