"""Tests for the base64 codec."""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

import pytest

from string_tools import DecodeError, decode, decode_text, encode, encode_text


def test_round_trip():
    for data in [b"", b"a", b"ab", b"abc", bytes(range(256)), "héllo".encode("utf-8")]:
        assert decode(encode(data)) == data


def test_known_vectors():
    # RFC 4648 section 10
    assert encode(b"f") == "Zg=="
    assert encode(b"fo") == "Zm8="
    assert encode(b"foobar") == "Zm9vYmFy"
    assert decode("Zm9vYg==") == b"foob"


def test_standard_alphabet():
    assert encode(b"\xfb\xff") == "+/8="


@pytest.mark.parametrize("bad", ["abc", "YQ=", "ab$=", "Zm9v\nYmFy", "é", "Zg==Zg=="])
def test_malformed_input(bad):
    with pytest.raises(DecodeError):
        decode(bad)


def test_decode_error_is_value_error():
    with pytest.raises(ValueError):
        decode("!!!!")


def test_text_round_trip():
    s = "héllo \U0001F600 שלום"
    assert decode_text(encode_text(s)) == s
    assert encode_text("hello") == "aGVsbG8="


def test_decode_text_rejects_non_utf8():
    with pytest.raises(DecodeError):
        decode_text(encode(b"\xff\xfe\xfd"))
