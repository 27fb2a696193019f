"""Color space conversion and 4:2:0 chroma resampling."""

import numpy as np
import cv2
from typing import Tuple


def rgb_to_ycbcr(rgb: np.ndarray) -> np.ndarray:
    """RGB to zero-centered YCbCr using ITU-R BT.601 full range.

    Y is level-shifted by -128; Cb and Cr are returned without the +128 offset,
    so all three channels are centered on zero.
    """
    rgb = rgb.astype(np.float64)
    R, G, B = rgb[:, :, 0], rgb[:, :, 1], rgb[:, :, 2]
    Y = 0.299 * R + 0.587 * G + 0.114 * B - 128.0
    Cb = -0.168736 * R - 0.331264 * G + 0.5 * B
    Cr = 0.5 * R - 0.418688 * G - 0.081312 * B
    return np.stack([Y, Cb, Cr], axis=-1)


def ycbcr_to_rgb(ycbcr: np.ndarray) -> np.ndarray:
    """Zero-centered YCbCr back to RGB uint8, rounded and clamped to [0, 255]."""
    Y, Cb, Cr = ycbcr[:, :, 0] + 128.0, ycbcr[:, :, 1], ycbcr[:, :, 2]
    R = Y + 1.402 * Cr
    G = Y - 0.344136 * Cb - 0.714136 * Cr
    B = Y + 1.772 * Cb
    rgb = np.stack([R, G, B], axis=-1)
    return np.clip(np.floor(rgb + 0.5), 0, 255).astype(np.uint8)


def chroma_shape(shape: Tuple[int, int]) -> Tuple[int, int]:
    """Half-resolution grid size, rounded up for odd dimensions."""
    h, w = shape
    return (h + 1) // 2, (w + 1) // 2


def subsample_chroma(channel: np.ndarray) -> np.ndarray:
    """4:2:0 subsampling: average every 2x2 neighbourhood."""
    h, w = channel.shape
    # Odd edges are replicated so the last row/column still has a full 2x2 cell
    padded = np.pad(channel, ((0, h % 2), (0, w % 2)), mode='edge')
    sub_h, sub_w = chroma_shape((h, w))
    return cv2.resize(padded, (sub_w, sub_h), interpolation=cv2.INTER_AREA)


def upsample_chroma(channel: np.ndarray, target_shape: Tuple[int, int]) -> np.ndarray:
    """Nearest-neighbour upsampling: each sample fills its 2x2 neighbourhood."""
    h, w = target_shape
    sub_h, sub_w = channel.shape
    doubled = cv2.resize(channel, (sub_w * 2, sub_h * 2), interpolation=cv2.INTER_NEAREST)
    return doubled[:h, :w]
