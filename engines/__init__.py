"""Codec engines - pure computation, no I/O."""

from .errors import CodecError, EmptyInputError, CorruptStreamError, BadCodeError, UnsupportedValueError
from .codec_base import Codec, get_codec, available_codecs
from .huffman_codec import BitstreamPrefixCodec
from .text_huffman import TextPrefixCodec
from .lzw_codec import DictionaryCodec, pack_codes, unpack_codes
from .color_space import rgb_to_ycbcr, ycbcr_to_rgb, subsample_chroma, upsample_chroma
from .block_processor import pad_to_multiple, split_into_blocks, merge_blocks
from .dct_engine import dct2, idct2, encode_block, decode_block
from .quantizer import scale_quant_matrix, quantize, dequantize
from .run_length import zigzag_scan, inverse_zigzag, encode_blocks, decode_blocks
from .image_codec import BlockTransformImageCodec, compress_reconstruct

__all__ = [
    'CodecError',
    'EmptyInputError',
    'CorruptStreamError',
    'BadCodeError',
    'UnsupportedValueError',
    'Codec',
    'get_codec',
    'available_codecs',
    'BitstreamPrefixCodec',
    'TextPrefixCodec',
    'DictionaryCodec',
    'pack_codes',
    'unpack_codes',
    'rgb_to_ycbcr',
    'ycbcr_to_rgb',
    'subsample_chroma',
    'upsample_chroma',
    'pad_to_multiple',
    'split_into_blocks',
    'merge_blocks',
    'dct2',
    'idct2',
    'encode_block',
    'decode_block',
    'scale_quant_matrix',
    'quantize',
    'dequantize',
    'zigzag_scan',
    'inverse_zigzag',
    'encode_blocks',
    'decode_blocks',
    'BlockTransformImageCodec',
    'compress_reconstruct',
]
