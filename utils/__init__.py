"""Shared utilities."""

from .constants import JPEG_LUMA_Q50, JPEG_CHROMA_Q50, ZIGZAG_ORDER
from .metrics import compute_psnr_ssim, Timer, image_artifact_stats
from .test_images import generate_gradient, generate_uniform, generate_colored_checkerboard
from .image_io import load_image, save_image

__all__ = [
    'JPEG_LUMA_Q50',
    'JPEG_CHROMA_Q50',
    'ZIGZAG_ORDER',
    'compute_psnr_ssim',
    'Timer',
    'image_artifact_stats',
    'generate_gradient',
    'generate_uniform',
    'generate_colored_checkerboard',
    'load_image',
    'save_image',
]
