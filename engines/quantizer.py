"""Quantization operations."""

import numpy as np


def scale_quant_matrix(base_matrix: np.ndarray, quality: int) -> np.ndarray:
    """Scale quantization matrix by quality factor (1-100)."""
    quality = int(np.clip(quality, 1, 100))

    # JPEG scaling formula
    if quality < 50:
        scale = 5000.0 / quality
    else:
        scale = 200.0 - 2.0 * quality

    # Half-up rounding
    Q = np.floor((base_matrix * scale + 50.0) / 100.0 + 0.5)
    Q = np.clip(Q, 1, 255)
    return Q.astype(np.float64)


def quantize(dct_coeffs: np.ndarray, Q_matrix: np.ndarray) -> np.ndarray:
    """Quantize DCT coefficients, rounding half-up."""
    return np.floor(dct_coeffs / Q_matrix + 0.5).astype(np.int32)


def dequantize(quantized: np.ndarray, Q_matrix: np.ndarray) -> np.ndarray:
    """Dequantize coefficients."""
    return quantized.astype(np.float64) * Q_matrix
