"""Tests for the text Huffman codec."""

import pytest
from engines.errors import CorruptStreamError, EmptyInputError
from engines.text_huffman import TextPrefixCodec


@pytest.fixture
def codec():
    return TextPrefixCodec()


@pytest.mark.parametrize('text', [
    'hello world\n',
    'line one\nline two\r\nline three',
    'naïve café ☃ – ünïcödé',
    'ab' * 500,
])
def test_roundtrip(codec, text):
    assert codec.decompress(codec.compress(text)) == text


def test_artifact_layout(codec):
    assert codec.compress('aab') == 'TABLE\n97:1\n98:0\nDATA\n110'


def test_single_character_text(codec):
    artifact = codec.compress('AAAA')
    assert artifact == 'TABLE\n65:0\nDATA\n0000'
    assert codec.decompress(artifact) == 'AAAA'


def test_data_section_is_binary_text(codec):
    artifact = codec.compress('the quick brown fox')
    header, data = artifact.split('\nDATA\n')
    assert header.startswith('TABLE\n')
    assert set(data) <= {'0', '1'}
    for line in header.split('\n')[1:]:
        point, bits = line.split(':')
        assert point.isdigit()
        assert set(bits) <= {'0', '1'}


def test_wrapped_data_section(codec):
    artifact = codec.compress('mississippi')
    header, data = artifact.split('\nDATA\n')
    wrapped = header + '\nDATA\n' + '\n'.join(data[i:i + 4] for i in range(0, len(data), 4))
    assert codec.decompress(wrapped) == 'mississippi'


def test_empty_text(codec):
    with pytest.raises(EmptyInputError):
        codec.compress('')
    with pytest.raises(EmptyInputError):
        codec.decompress('')


@pytest.mark.parametrize('artifact', [
    'DATA\n0101',                              # no TABLE marker
    'TABLE\n97:0\n98:1\n0101',                 # no DATA marker
    'TABLE\nDATA\n0101',                       # empty table
    'TABLE\n97-0\nDATA\n0',                    # malformed line
    'TABLE\n97:0\n98:0\nDATA\n0',              # duplicate code
    'TABLE\n97:0\n98:1\nDATA\n01x',            # non-binary data
    'TABLE\n97:00\n98:01\n99:1\nDATA\n10',     # trailing bits
    'TABLE\n97:00\n98:01\nDATA\n11',           # bits match nothing
])
def test_corrupt_artifacts(codec, artifact):
    with pytest.raises(CorruptStreamError):
        codec.decompress(artifact)
