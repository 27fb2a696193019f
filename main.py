"""
Codec Studio
Huffman, LZW and JPEG-like compression from the command line.
"""

import sys
import warnings
from pathlib import Path

warnings.filterwarnings('ignore', category=RuntimeWarning)

USAGE = """\
Usage: python main.py compress   <codec> <input> <output> [quality]
       python main.py decompress <codec> <input> <output> [quality]
       python main.py demo [quality] [uniform|gradient|checkerboard|chroma_stripes]

Codecs: huffman, text-huffman, lzw, jpeg
"""


def _compress(codec_name, input_path: Path, output_path: Path, codec, timer):
    from utils.image_io import load_image

    if codec_name == 'jpeg':
        image = load_image(input_path)
        print(f"Image: {image.shape[1]}x{image.shape[0]}")
        print(f"Quality: {codec.params.quality}")
        output_path.write_bytes(timer.measure_encode(codec.compress, image))
        return image.size
    if codec_name == 'huffman':
        data = input_path.read_bytes()
        output_path.write_bytes(timer.measure_encode(codec.compress, data))
        return len(data)
    if codec_name == 'text-huffman':
        text = input_path.read_text(encoding='utf-8')
        output_path.write_text(timer.measure_encode(codec.compress, text), encoding='utf-8')
        return len(text.encode('utf-8'))
    # lzw: Latin-1 maps every byte to one character in the 0-255 alphabet
    text = input_path.read_bytes().decode('latin-1')
    output_path.write_bytes(timer.measure_encode(codec.compress_to_bytes, text))
    return len(text)


def _decompress(codec_name, input_path: Path, output_path: Path, codec, timer):
    from engines.errors import UnsupportedValueError
    from utils.image_io import save_image

    if codec_name == 'jpeg':
        image = timer.measure_decode(codec.decompress, input_path.read_bytes())
        save_image(image, output_path)
        print(f"Image: {image.shape[1]}x{image.shape[0]}")
    elif codec_name == 'huffman':
        values = timer.measure_decode(codec.decompress, input_path.read_bytes())
        if any(not 0 <= v <= 255 for v in values):
            raise UnsupportedValueError("Decoded symbols are not bytes; not a file artifact")
        output_path.write_bytes(bytes(values))
    elif codec_name == 'text-huffman':
        text = timer.measure_decode(codec.decompress, input_path.read_text(encoding='utf-8'))
        output_path.write_text(text, encoding='utf-8')
    else:
        text = timer.measure_decode(codec.decompress_from_bytes, input_path.read_bytes())
        output_path.write_bytes(text.encode('latin-1'))


def run_codec(mode: str, args):
    """Compress or decompress one file with the named codec."""
    from engines import CodecError, get_codec
    from utils.metrics import Timer, compression_ratio

    if len(args) < 3:
        print(USAGE)
        sys.exit(2)

    codec_name, input_path, output_path = args[0], Path(args[1]), Path(args[2])
    try:
        kwargs = {'quality': int(args[3])} if codec_name == 'jpeg' and len(args) > 3 else {}
        codec = get_codec(codec_name, **kwargs)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(2)

    timer = Timer()
    print(f"{mode.capitalize()}: {input_path} -> {output_path} ({codec_name})")
    try:
        if mode == 'compress':
            original_size = _compress(codec_name, input_path, output_path, codec, timer)
        else:
            _decompress(codec_name, input_path, output_path, codec, timer)
    except (CodecError, OSError, UnicodeError) as e:
        print(f"Error: {e}")
        sys.exit(1)

    print("\n=== Results ===")
    if mode == 'compress':
        compressed_size = output_path.stat().st_size
        print(f"Input:     {original_size} bytes")
        print(f"Output:    {compressed_size} bytes")
        print(f"Ratio:     {compression_ratio(original_size, compressed_size):.2f}:1")
        print(f"Time:      {timer.encode_time_ms:.2f} ms")
    else:
        print(f"Output:    {output_path.stat().st_size} bytes")
        print(f"Time:      {timer.decode_time_ms:.2f} ms")


def run_demo(args):
    """Round-trip a synthetic image through the image codec."""
    from models.compression_params import ImageCodecParams
    from engines.image_codec import compress_reconstruct
    from utils.test_images import generate_demo_image
    from utils.image_io import save_image

    quality = int(args[0]) if args else 30
    key = args[1] if len(args) > 1 else 'gradient'
    print(f"Generating test image ({key})...")
    image = generate_demo_image(key)
    if image is None:
        print(f"Unknown demo image: {key}")
        sys.exit(2)

    print(f"Image: {image.shape[1]}x{image.shape[0]}")
    print(f"Quality: {quality}")

    result = compress_reconstruct(image, ImageCodecParams(quality=quality))

    print("\n=== Results ===")
    print(f"PSNR (Y):  {result.psnr_y:.2f} dB")
    print(f"SSIM (Y):  {result.ssim_y:.4f}")
    print(f"Max error: {result.max_abs_error}")
    print(f"Size:      {result.artifact_bytes} bytes")
    print(f"BPP:       {result.bpp:.3f}")
    print(f"Ratio:     {result.compression_ratio:.2f}:1")
    print(f"Time:      {result.encode_time_ms + result.decode_time_ms:.2f} ms")

    save_image(result.reconstructed_image, "reconstructed.png")
    print("\nSaved: reconstructed.png")


def main():
    if len(sys.argv) < 2 or sys.argv[1] in ('-h', '--help'):
        print(USAGE)
        sys.exit(0)

    command, args = sys.argv[1], sys.argv[2:]
    if command in ('compress', 'decompress'):
        run_codec(command, args)
    elif command == 'demo':
        run_demo(args)
    else:
        print(USAGE)
        sys.exit(2)


if __name__ == '__main__':
    main()
