"""Tests for the block-transform image codec."""

import struct
import numpy as np
import pytest
from models.compression_params import ImageCodecParams
from engines.codec_base import get_codec
from engines.errors import CorruptStreamError, EmptyInputError
from engines.huffman_codec import BitstreamPrefixCodec
from engines.image_codec import BlockTransformImageCodec, compress_reconstruct
from engines.run_length import END_OF_BLOCK
from utils.test_images import generate_uniform, generate_gradient


def test_default_quality():
    codec = BlockTransformImageCodec()
    assert codec.params.quality == 30
    assert not codec.params.tolerant_decode


def test_invalid_quality():
    with pytest.raises(ValueError):
        ImageCodecParams(quality=0)
    with pytest.raises(ValueError):
        BlockTransformImageCodec(quality=101)


def test_mid_gray_is_exact():
    image = np.full((16, 24, 3), 128, dtype=np.uint8)
    codec = BlockTransformImageCodec(quality=30)
    assert np.array_equal(codec.decompress(codec.compress(image)), image)


def test_uniform_image_quality_100():
    image = generate_uniform(32, 40, (200, 40, 90))
    result = compress_reconstruct(image, ImageCodecParams(quality=100))
    assert result.reconstructed_image.shape == image.shape
    assert result.max_abs_error <= 4


def test_gradient_quality_100():
    image = generate_gradient(64)
    result = compress_reconstruct(image, ImageCodecParams(quality=100))
    assert result.max_abs_error <= 8
    assert result.psnr_rgb > 40.0


@pytest.mark.parametrize('shape', [(1, 1), (13, 21), (9, 8), (8, 17)])
def test_odd_sizes(shape):
    image = generate_uniform(*shape, color=(60, 120, 180))
    codec = BlockTransformImageCodec(quality=100)
    recovered = codec.decompress(codec.compress(image))
    assert recovered.shape == image.shape
    assert np.max(np.abs(recovered.astype(int) - image.astype(int))) <= 4


def test_header_layout():
    image = generate_gradient(16, 24)
    artifact = BlockTransformImageCodec().compress(image)
    width, height, y_len, cb_len, cr_len = struct.unpack_from('>5I', artifact)
    assert (width, height) == (24, 16)
    assert len(artifact) == 20 + y_len + cb_len + cr_len


def test_deterministic():
    image = generate_gradient(32)
    codec = BlockTransformImageCodec()
    assert codec.compress(image) == codec.compress(image)


def test_quality_psnr_monotonic():
    """PSNR should increase with quality."""
    image = np.random.default_rng(7).integers(0, 256, (64, 64, 3), dtype=np.uint8)
    psnr_values = [
        compress_reconstruct(image, ImageCodecParams(quality=q)).psnr_y
        for q in [10, 30, 50, 70, 90]
    ]
    for i in range(len(psnr_values) - 1):
        assert psnr_values[i] <= psnr_values[i + 1] + 0.1


def test_compression_ratio_increases_with_lower_quality():
    """Lower quality = smaller artifact."""
    image = generate_gradient(64)
    result_high = compress_reconstruct(image, ImageCodecParams(quality=90))
    result_low = compress_reconstruct(image, ImageCodecParams(quality=10))
    assert result_low.compression_ratio >= result_high.compression_ratio
    assert result_low.compression_ratio > 1.0


def test_invalid_images():
    codec = BlockTransformImageCodec()
    with pytest.raises(ValueError):
        codec.compress(np.zeros((8, 8), dtype=np.uint8))
    with pytest.raises(EmptyInputError):
        codec.compress(np.zeros((0, 8, 3), dtype=np.uint8))


def test_truncated_artifacts():
    codec = BlockTransformImageCodec()
    artifact = codec.compress(generate_gradient(16))
    with pytest.raises(CorruptStreamError):
        codec.decompress(artifact[:10])
    with pytest.raises(CorruptStreamError):
        codec.decompress(artifact[:-3])
    with pytest.raises(CorruptStreamError):
        codec.decompress(artifact + b'\x00')


def _short_artifact():
    """8x16 image whose Y stream only covers the first of its two blocks."""
    one_block = BitstreamPrefixCodec().encode([0, END_OF_BLOCK])
    blobs = [one_block, one_block, one_block]
    return struct.pack('>5I', 16, 8, *(len(b) for b in blobs)) + b''.join(blobs)


def test_short_stream_strict():
    with pytest.raises(CorruptStreamError):
        BlockTransformImageCodec().decompress(_short_artifact())


def test_short_stream_tolerant():
    codec = BlockTransformImageCodec(tolerant_decode=True)
    image = codec.decompress(_short_artifact())
    assert image.shape == (8, 16, 3)
    assert np.all(image == 128)


def test_registry_quality():
    codec = get_codec('jpeg', quality=75)
    assert isinstance(codec, BlockTransformImageCodec)
    assert codec.params.quality == 75


@pytest.mark.parametrize('tolerant', [False, True])
def test_oversized_symbol_count(tolerant):
    """An 8x8 channel cannot hold more than one block's worth of symbols."""
    huge = b'\x01\x00\x00' + struct.pack('>II', 0xFFFFFFFF, 0)
    small = BitstreamPrefixCodec().encode([0, END_OF_BLOCK])
    blobs = [huge, small, small]
    artifact = struct.pack('>5I', 8, 8, *(len(b) for b in blobs)) + b''.join(blobs)
    with pytest.raises(CorruptStreamError):
        BlockTransformImageCodec(tolerant_decode=tolerant).decompress(artifact)
