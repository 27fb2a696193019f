"""Data models for codec parameters and results."""

from .compression_params import ImageCodecParams
from .compression_result import CompressionResult

__all__ = ['ImageCodecParams', 'CompressionResult']
