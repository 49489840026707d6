"""Base64 codec, RFC 4648 standard alphabet with '=' padding."""

from __future__ import annotations
import base64
import binascii

from .errors import DecodeError


def encode(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def decode(text: str) -> bytes:
    """Decode base64 text.

    Strict: any character outside the alphabet (whitespace included) or
    bad padding raises DecodeError.
    """
    try:
        return base64.b64decode(text, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise DecodeError(f"invalid base64 input: {exc}") from exc


def encode_text(text: str) -> str:
    """UTF-8 encode a string, then base64 it."""
    return encode(text.encode("utf-8"))


def decode_text(text: str) -> str:
    data = decode(text)
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise DecodeError(f"decoded bytes are not UTF-8: {exc}") from exc
