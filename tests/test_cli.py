"""Tests for the command-line shell and codec registry."""

import sys
import numpy as np
import pytest
import main
from engines.codec_base import available_codecs, get_codec
from utils.image_io import load_image, save_image
from utils.test_images import generate_gradient


def _run(monkeypatch, *args):
    monkeypatch.setattr(sys, 'argv', ['main.py', *args])
    main.main()


def test_available_codecs():
    assert available_codecs() == ['huffman', 'jpeg', 'lzw', 'text-huffman']


def test_unknown_codec():
    with pytest.raises(ValueError):
        get_codec('zip')


@pytest.mark.parametrize('codec_name', ['huffman', 'text-huffman', 'lzw'])
def test_text_file_roundtrip(monkeypatch, tmp_path, capsys, codec_name):
    source = tmp_path / 'input.txt'
    source.write_text('to be or not to be, that is the question\n' * 20, encoding='utf-8')
    packed = tmp_path / 'packed.bin'
    restored = tmp_path / 'restored.txt'

    _run(monkeypatch, 'compress', codec_name, str(source), str(packed))
    _run(monkeypatch, 'decompress', codec_name, str(packed), str(restored))

    assert restored.read_bytes() == source.read_bytes()
    output = capsys.readouterr().out
    assert 'Ratio:' in output
    assert 'Time:' in output


def test_image_roundtrip(monkeypatch, tmp_path):
    source = tmp_path / 'input.png'
    save_image(generate_gradient(32), source)
    packed = tmp_path / 'packed.bin'
    restored = tmp_path / 'restored.png'

    _run(monkeypatch, 'compress', 'jpeg', str(source), str(packed), '90')
    _run(monkeypatch, 'decompress', 'jpeg', str(packed), str(restored), '90')

    original = load_image(source)
    recovered = load_image(restored)
    assert recovered.shape == original.shape
    assert np.mean(np.abs(recovered.astype(int) - original.astype(int))) < 3


def test_corrupt_input_exits(monkeypatch, tmp_path, capsys):
    packed = tmp_path / 'bad.lzw'
    packed.write_bytes(b'\x00\x00\x01\x00')
    with pytest.raises(SystemExit) as exc:
        _run(monkeypatch, 'decompress', 'lzw', str(packed), str(tmp_path / 'out.txt'))
    assert exc.value.code == 1
    assert 'Error:' in capsys.readouterr().out


def test_empty_input_exits(monkeypatch, tmp_path):
    source = tmp_path / 'empty.txt'
    source.write_text('', encoding='utf-8')
    with pytest.raises(SystemExit) as exc:
        _run(monkeypatch, 'compress', 'text-huffman', str(source), str(tmp_path / 'out.txt'))
    assert exc.value.code == 1


def test_demo(monkeypatch, tmp_path, capsys):
    monkeypatch.chdir(tmp_path)
    _run(monkeypatch, 'demo', '50', 'uniform')
    assert (tmp_path / 'reconstructed.png').exists()
    assert 'PSNR (Y):' in capsys.readouterr().out


def test_non_byte_symbols_exit(monkeypatch, tmp_path, capsys):
    from engines.huffman_codec import BitstreamPrefixCodec

    packed = tmp_path / 'symbols.huf'
    packed.write_bytes(BitstreamPrefixCodec().encode([300, -5, 300]))
    out = tmp_path / 'out.bin'
    with pytest.raises(SystemExit) as exc:
        _run(monkeypatch, 'decompress', 'huffman', str(packed), str(out))
    assert exc.value.code == 1
    assert 'Error:' in capsys.readouterr().out
    assert not out.exists()
