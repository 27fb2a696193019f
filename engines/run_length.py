"""
Zigzag scan and the per-channel symbol stream fed to the Huffman coder.

Each block contributes:
    DC - previous DC, then (zero run, value) pairs for nonzero AC coefficients,
    then END_OF_BLOCK.

END_OF_BLOCK sits where a run length would be read, and runs are never
negative, so it cannot be mistaken for a pair.
"""

import numpy as np
from typing import Iterable, List

from engines.errors import CorruptStreamError
from utils.constants import BLOCK_SIZE, END_OF_BLOCK, ZIGZAG_FLAT

COEFFS_PER_BLOCK = BLOCK_SIZE * BLOCK_SIZE


def zigzag_scan(block: np.ndarray) -> np.ndarray:
    """8x8 block -> 64 coefficients, low frequencies first."""
    return block.reshape(-1)[ZIGZAG_FLAT]


def inverse_zigzag(coeffs: np.ndarray) -> np.ndarray:
    """64 zigzag-ordered coefficients -> 8x8 block."""
    block = np.zeros(COEFFS_PER_BLOCK, dtype=np.asarray(coeffs).dtype)
    block[ZIGZAG_FLAT] = coeffs
    return block.reshape(BLOCK_SIZE, BLOCK_SIZE)


def encode_blocks(quantized_blocks: Iterable[np.ndarray]) -> List[int]:
    """Symbol stream for one channel; blocks must come in raster order."""
    symbols: List[int] = []
    prev_dc = 0
    for block in quantized_blocks:
        zz = zigzag_scan(block).tolist()
        dc = zz[0]
        symbols.append(dc - prev_dc)
        prev_dc = dc

        run = 0
        for coeff in zz[1:]:
            if coeff == 0:
                run += 1
            else:
                symbols.append(run)
                symbols.append(coeff)
                run = 0
        symbols.append(END_OF_BLOCK)
    return symbols


def decode_blocks(symbols: List[int], num_blocks: int, tolerant: bool = False) -> List[np.ndarray]:
    """
    Rebuild `num_blocks` quantized 8x8 blocks from a channel's symbol stream.

    In strict mode any truncation, overflowing run or trailing symbol raises
    CorruptStreamError. In tolerant mode a short stream leaves the remaining
    coefficients (and blocks) zero and excess runs are clipped.
    """
    blocks = []
    pos = 0
    prev_dc = 0
    total = len(symbols)

    for block_idx in range(num_blocks):
        zz = np.zeros(COEFFS_PER_BLOCK, dtype=np.int32)

        if pos >= total:
            if not tolerant:
                raise CorruptStreamError(
                    f"Symbol stream ended before block {block_idx} of {num_blocks}"
                )
            blocks.append(inverse_zigzag(zz))
            continue

        prev_dc += symbols[pos]
        zz[0] = prev_dc
        pos += 1

        k = 1
        terminated = False
        while pos < total:
            run = symbols[pos]
            pos += 1
            if run == END_OF_BLOCK:
                terminated = True
                break
            if pos >= total:
                if not tolerant:
                    raise CorruptStreamError(f"Block {block_idx}: run without a value")
                break
            value = symbols[pos]
            pos += 1
            if run < 0 or k + run >= COEFFS_PER_BLOCK:
                if not tolerant:
                    raise CorruptStreamError(
                        f"Block {block_idx}: run {run} overflows the block"
                    )
                k = COEFFS_PER_BLOCK
                continue
            k += run
            zz[k] = value
            k += 1

        if not terminated and not tolerant:
            raise CorruptStreamError(f"Block {block_idx} is missing its end-of-block marker")
        blocks.append(inverse_zigzag(zz))

    if pos != total and not tolerant:
        raise CorruptStreamError(f"{total - pos} trailing symbols after the last block")
    return blocks
