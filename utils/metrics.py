"""Metrics: PSNR, SSIM, artifact size statistics, timing."""

import time
import numpy as np
from skimage.metrics import peak_signal_noise_ratio, structural_similarity
from typing import Dict, Tuple

# Default SSIM window; smaller images get no SSIM score
SSIM_MIN_SIDE = 7


def _ssim(original: np.ndarray, reconstructed: np.ndarray, **kwargs) -> float:
    if min(original.shape[:2]) < SSIM_MIN_SIDE:
        return float('nan')
    return float(structural_similarity(original, reconstructed, data_range=255, **kwargs))


def _luma(rgb: np.ndarray) -> np.ndarray:
    rgb = rgb.astype(np.float64)
    return 0.299 * rgb[:, :, 0] + 0.587 * rgb[:, :, 1] + 0.114 * rgb[:, :, 2]


def compute_psnr_ssim(original_rgb: np.ndarray, reconstructed_rgb: np.ndarray) -> Dict[str, float]:
    """Compute PSNR and SSIM on RGB and Y channel."""
    psnr_rgb = peak_signal_noise_ratio(original_rgb, reconstructed_rgb, data_range=255)
    ssim_rgb = _ssim(original_rgb, reconstructed_rgb, channel_axis=2)

    # Y channel (luminance) - BT.601
    original_y = _luma(original_rgb)
    recon_y = _luma(reconstructed_rgb)

    psnr_y = peak_signal_noise_ratio(original_y, recon_y, data_range=255)
    ssim_y = _ssim(original_y, recon_y)

    return {
        'psnr_rgb': float(psnr_rgb),
        'ssim_rgb': ssim_rgb,
        'psnr_y': float(psnr_y),
        'ssim_y': ssim_y
    }


def max_abs_error(original: np.ndarray, reconstructed: np.ndarray) -> int:
    """Largest per-sample absolute difference."""
    diff = np.abs(original.astype(np.int32) - reconstructed.astype(np.int32))
    return int(diff.max()) if diff.size else 0


class Timer:
    """Simple timer for encode/decode runtime."""

    def __init__(self):
        self.encode_time_ms = 0.0
        self.decode_time_ms = 0.0

    def measure_encode(self, func, *args, **kwargs):
        start = time.perf_counter()
        result = func(*args, **kwargs)
        self.encode_time_ms = (time.perf_counter() - start) * 1000.0
        return result

    def measure_decode(self, func, *args, **kwargs):
        start = time.perf_counter()
        result = func(*args, **kwargs)
        self.decode_time_ms = (time.perf_counter() - start) * 1000.0
        return result


def compression_ratio(original_bytes: int, compressed_bytes: int) -> float:
    return float(original_bytes / max(compressed_bytes, 1))


def image_artifact_stats(artifact_bytes: int, image_shape: Tuple[int, int]) -> Dict:
    """Bits per pixel and ratio against raw 24-bit RGB."""
    h, w = image_shape
    num_pixels = max(h * w, 1)
    return {
        'artifact_bytes': int(artifact_bytes),
        'bpp': float(artifact_bytes * 8 / num_pixels),
        'compression_ratio': compression_ratio(num_pixels * 3, artifact_bytes),
    }
