"""Block processing: padding, splitting, merging."""

import numpy as np
from typing import List, Tuple


def pad_to_multiple(channel: np.ndarray, block_size: int) -> Tuple[np.ndarray, Tuple[int, int]]:
    """Zero-pad channel on the bottom/right to a multiple of block_size."""
    h, w = channel.shape
    pad_h = (block_size - h % block_size) % block_size
    pad_w = (block_size - w % block_size) % block_size
    if pad_h > 0 or pad_w > 0:
        padded = np.pad(channel, ((0, pad_h), (0, pad_w)), mode='constant')
    else:
        padded = channel.copy()
    return padded, (h, w)


def block_grid(shape: Tuple[int, int], block_size: int) -> Tuple[int, int]:
    """Number of block rows and columns covering a channel."""
    h, w = shape
    return -(-h // block_size), -(-w // block_size)


def split_into_blocks(channel: np.ndarray, block_size: int) -> List[Tuple[int, int, np.ndarray]]:
    """Split 2D channel into BxB blocks in raster order, zero-filling partial blocks."""
    h, w = channel.shape
    blocks = []
    for i in range(0, h, block_size):
        for j in range(0, w, block_size):
            block = channel[i:i+block_size, j:j+block_size]
            if block.shape[0] < block_size or block.shape[1] < block_size:
                padded_block = np.zeros((block_size, block_size), dtype=channel.dtype)
                padded_block[:block.shape[0], :block.shape[1]] = block
                block = padded_block
            blocks.append((i, j, block.copy()))
    return blocks


def merge_blocks(
    blocks: List[Tuple[int, int, np.ndarray]],
    shape: Tuple[int, int],
    block_size: int
) -> np.ndarray:
    """Merge blocks back into a 2D channel, cropping anything past `shape`."""
    h, w = shape
    result = np.zeros((h, w), dtype=np.float64)
    for (i, j, block) in blocks:
        end_i = min(i + block_size, h)
        end_j = min(j + block_size, w)
        result[i:end_i, j:end_j] = block[:end_i - i, :end_j - j]
    return result
