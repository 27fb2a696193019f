"""
Character-level Huffman codec with a human-readable artifact.

    TABLE
    <code point>:<bits>
    ...
    DATA
    <bits of every character, as '0'/'1' text>

No bit packing is done; this is the readable sibling of the bitstream codec and
shares its tree construction.
"""

from typing import Dict

from engines.codec_base import Codec, register_codec
from engines.errors import CorruptStreamError, EmptyInputError
from engines.prefix_tree import build_code_table, build_tree, frequency_table

TABLE_MARKER = 'TABLE'
DATA_MARKER = 'DATA'

# A lone symbol has no tree path; the data section needs at least one bit per character
LONE_SYMBOL_CODE = '0'


def build_text_code_table(text: str) -> Dict[str, str]:
    if not text:
        raise EmptyInputError("Nothing to encode")
    root = build_tree(frequency_table(text))
    return build_code_table(root, lone_leaf_code=LONE_SYMBOL_CODE)


def format_table(codes: Dict[str, str]) -> str:
    lines = [f"{ord(ch)}:{bits}" for ch, bits in sorted(codes.items(), key=lambda kv: ord(kv[0]))]
    return '\n'.join(lines)


def parse_table(lines) -> Dict[str, str]:
    """Parse `code point:bits` lines into a bits -> character map."""
    reverse: Dict[str, str] = {}
    for line_no, line in enumerate(lines, start=2):
        line = line.strip()
        if not line:
            continue
        point, sep, bits = line.partition(':')
        if not sep or not point.isdigit() or not bits or set(bits) - {'0', '1'}:
            raise CorruptStreamError(f"Malformed table line {line_no}: {line!r}")
        try:
            ch = chr(int(point))
        except (ValueError, OverflowError):
            raise CorruptStreamError(f"Invalid code point on line {line_no}: {point}") from None
        if bits in reverse:
            raise CorruptStreamError(f"Duplicate code {bits!r} on line {line_no}")
        reverse[bits] = ch
    if not reverse:
        raise CorruptStreamError("Code table is empty")
    return reverse


@register_codec
class TextPrefixCodec(Codec):
    """Whole-text Huffman compressor producing a textual artifact."""

    name = 'text-huffman'

    def compress(self, text: str) -> str:
        codes = build_text_code_table(text)
        data = ''.join(codes[ch] for ch in text)
        return f"{TABLE_MARKER}\n{format_table(codes)}\n{DATA_MARKER}\n{data}"

    def decompress(self, artifact: str) -> str:
        if not artifact:
            raise EmptyInputError("Nothing to decode")

        lines = artifact.split('\n')
        if lines[0].strip() != TABLE_MARKER:
            raise CorruptStreamError(f"Artifact does not start with {TABLE_MARKER}")
        try:
            data_at = next(i for i, line in enumerate(lines) if line.strip() == DATA_MARKER)
        except StopIteration:
            raise CorruptStreamError(f"Missing {DATA_MARKER} marker") from None

        reverse = parse_table(lines[1:data_at])
        data = ''.join(''.join(lines[data_at + 1:]).split())

        longest = max(len(bits) for bits in reverse)
        out = []
        candidate = ''
        for bit in data:
            if bit not in '01':
                raise CorruptStreamError(f"Invalid character in data section: {bit!r}")
            candidate += bit
            ch = reverse.get(candidate)
            if ch is not None:
                out.append(ch)
                candidate = ''
            elif len(candidate) >= longest:
                raise CorruptStreamError(f"Bits {candidate!r} match no code")

        if candidate:
            raise CorruptStreamError(f"Trailing bits {candidate!r} match no code")
        return ''.join(out)
