"""
Block-transform (JPEG-like) image codec.

Artifact layout (all integers 4-byte big-endian):
    [width][height][Y length][Cb length][Cr length][Y blob][Cb blob][Cr blob]

Each blob is a BitstreamPrefixCodec artifact holding that channel's
DC-differential / run-length symbol stream. The layout is private to this
package; it is not a JFIF bitstream.
"""

import dataclasses
import struct
import numpy as np
from typing import List, Optional, Tuple

from models.compression_params import ImageCodecParams
from models.compression_result import CompressionResult
from engines.codec_base import Codec, register_codec
from engines.errors import CorruptStreamError, EmptyInputError
from engines.huffman_codec import BitstreamPrefixCodec
from engines.color_space import rgb_to_ycbcr, ycbcr_to_rgb, chroma_shape, subsample_chroma, upsample_chroma
from engines.block_processor import pad_to_multiple, block_grid, split_into_blocks, merge_blocks
from engines.dct_engine import encode_block, decode_block
from engines.quantizer import scale_quant_matrix
from engines.run_length import encode_blocks, decode_blocks
from utils.constants import BLOCK_SIZE, JPEG_LUMA_Q50, JPEG_CHROMA_Q50
from utils.metrics import compute_psnr_ssim, max_abs_error, image_artifact_stats, Timer

_HEADER = struct.Struct('>5I')
# DC delta, 63 (run, value) pairs and the end-of-block marker
MAX_SYMBOLS_PER_BLOCK = 1 + 2 * 63 + 1
CHANNEL_NAMES = ('Y', 'Cb', 'Cr')


def _validate_image(image: np.ndarray) -> np.ndarray:
    image = np.asarray(image)
    if image.ndim != 3 or image.shape[2] != 3:
        raise ValueError(f"Expected an (H, W, 3) RGB image, got shape {image.shape}")
    if image.shape[0] == 0 or image.shape[1] == 0:
        raise EmptyInputError("Image has no pixels")
    return image


@register_codec
class BlockTransformImageCodec(Codec):
    """DCT + quantization + run-length + Huffman image codec."""

    name = 'jpeg'

    def __init__(self, params: Optional[ImageCodecParams] = None, **overrides):
        if params is None:
            params = ImageCodecParams(**overrides)
        elif overrides:
            params = dataclasses.replace(params, **overrides)
        self.params = params
        self.luma_Q = scale_quant_matrix(JPEG_LUMA_Q50, params.quality)
        self.chroma_Q = scale_quant_matrix(JPEG_CHROMA_Q50, params.quality)

    def _tables(self) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        return self.luma_Q, self.chroma_Q, self.chroma_Q

    # === ENCODING ===

    def compress_channel(self, channel: np.ndarray, Q_matrix: np.ndarray) -> bytes:
        padded, _ = pad_to_multiple(channel, BLOCK_SIZE)
        quantized_blocks = [
            encode_block(block, Q_matrix)
            for (_, _, block) in split_into_blocks(padded, BLOCK_SIZE)
        ]
        return BitstreamPrefixCodec().encode(encode_blocks(quantized_blocks))

    def compress(self, image: np.ndarray) -> bytes:
        image = _validate_image(image)
        height, width = image.shape[:2]

        ycbcr = rgb_to_ycbcr(image)
        channels = [
            ycbcr[:, :, 0],
            subsample_chroma(ycbcr[:, :, 1]),
            subsample_chroma(ycbcr[:, :, 2]),
        ]

        blobs = [
            self.compress_channel(channel, Q)
            for channel, Q in zip(channels, self._tables())
        ]
        header = _HEADER.pack(width, height, *(len(blob) for blob in blobs))
        return header + b''.join(blobs)

    # === DECODING ===

    def decompress_channel(self, blob: bytes, Q_matrix: np.ndarray, shape: Tuple[int, int]) -> np.ndarray:
        rows, cols = block_grid(shape, BLOCK_SIZE)
        symbols = BitstreamPrefixCodec().decode(blob, max_count=rows * cols * MAX_SYMBOLS_PER_BLOCK)
        quantized_blocks = decode_blocks(symbols, rows * cols, tolerant=self.params.tolerant_decode)

        positions = [
            (r * BLOCK_SIZE, c * BLOCK_SIZE) for r in range(rows) for c in range(cols)
        ]
        blocks = [
            (i, j, decode_block(quantized, Q_matrix))
            for (i, j), quantized in zip(positions, quantized_blocks)
        ]
        return merge_blocks(blocks, shape, BLOCK_SIZE)

    def split_artifact(self, artifact: bytes) -> Tuple[int, int, List[bytes]]:
        """Parse the header and return width, height and the three channel blobs."""
        artifact = bytes(artifact)
        if len(artifact) < _HEADER.size:
            raise CorruptStreamError(
                f"Header truncated: {len(artifact)} of {_HEADER.size} bytes"
            )
        width, height, *lengths = _HEADER.unpack_from(artifact, 0)
        if width == 0 or height == 0:
            raise CorruptStreamError(f"Invalid image size {width}x{height}")

        blobs = []
        offset = _HEADER.size
        for name, length in zip(CHANNEL_NAMES, lengths):
            blob = artifact[offset:offset + length]
            if length == 0 or len(blob) != length:
                raise CorruptStreamError(
                    f"{name} channel truncated: expected {length} bytes, got {len(blob)}"
                )
            blobs.append(blob)
            offset += length

        if offset != len(artifact) and not self.params.tolerant_decode:
            raise CorruptStreamError(f"{len(artifact) - offset} unexpected trailing bytes")
        return width, height, blobs

    def decompress(self, artifact: bytes) -> np.ndarray:
        width, height, blobs = self.split_artifact(artifact)
        shapes = [(height, width), chroma_shape((height, width)), chroma_shape((height, width))]

        Y, Cb_sub, Cr_sub = [
            self.decompress_channel(blob, Q, shape)
            for blob, Q, shape in zip(blobs, self._tables(), shapes)
        ]
        Cb = upsample_chroma(Cb_sub, (height, width))
        Cr = upsample_chroma(Cr_sub, (height, width))

        return ycbcr_to_rgb(np.stack([Y, Cb, Cr], axis=-1))


def compress_reconstruct(image_rgb: np.ndarray, params: ImageCodecParams) -> CompressionResult:
    """Compress, decompress and measure one image."""
    image_rgb = _validate_image(image_rgb)
    codec = BlockTransformImageCodec(params)
    timer = Timer()

    artifact = timer.measure_encode(codec.compress, image_rgb)
    reconstructed = timer.measure_decode(codec.decompress, artifact)

    image_u8 = np.clip(image_rgb, 0, 255).astype(np.uint8)
    metrics = compute_psnr_ssim(image_u8, reconstructed)
    stats = image_artifact_stats(len(artifact), image_rgb.shape[:2])

    return CompressionResult(
        original_image=image_u8,
        reconstructed_image=reconstructed,
        artifact=artifact,
        psnr_y=metrics['psnr_y'],
        ssim_y=metrics['ssim_y'],
        psnr_rgb=metrics['psnr_rgb'],
        ssim_rgb=metrics['ssim_rgb'],
        max_abs_error=max_abs_error(image_u8, reconstructed),
        artifact_bytes=stats['artifact_bytes'],
        bpp=stats['bpp'],
        compression_ratio=stats['compression_ratio'],
        encode_time_ms=timer.encode_time_ms,
        decode_time_ms=timer.decode_time_ms,
    )
