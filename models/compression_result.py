"""Compression result with metrics."""

from dataclasses import dataclass
import numpy as np


@dataclass
class CompressionResult:
    """Results from a compress/decompress round trip."""

    original_image: np.ndarray
    reconstructed_image: np.ndarray
    artifact: bytes

    # Quality metrics
    psnr_y: float
    ssim_y: float
    psnr_rgb: float
    ssim_rgb: float
    max_abs_error: int

    # Compression stats
    artifact_bytes: int
    bpp: float
    compression_ratio: float

    # Runtime
    encode_time_ms: float
    decode_time_ms: float
