"""8x8 DCT/IDCT and per-block transform coding."""

import numpy as np
from scipy.fft import dctn, idctn

from engines.quantizer import quantize, dequantize


def dct2(block: np.ndarray) -> np.ndarray:
    """2D DCT-II with orthonormal normalization.

    For 8x8 blocks this is result[u][v] = 0.25 * Cu * Cv * sum(...),
    with Cu = Cv = 1/sqrt(2) at frequency zero.
    """
    return dctn(block, type=2, norm='ortho')


def idct2(coeffs: np.ndarray) -> np.ndarray:
    """2D inverse DCT (Type-III)."""
    return idctn(coeffs, type=2, norm='ortho')


def encode_block(block: np.ndarray, Q_matrix: np.ndarray) -> np.ndarray:
    """DCT then quantize a centered block."""
    return quantize(dct2(block.astype(np.float64)), Q_matrix)


def decode_block(quantized: np.ndarray, Q_matrix: np.ndarray) -> np.ndarray:
    """Dequantize then IDCT back to centered samples."""
    return idct2(dequantize(quantized, Q_matrix))
