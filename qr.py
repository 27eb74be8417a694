"""
Thin wrapper around the QR encoding library.

WHAT:
- Hide segno behind a tiny interface (PNG bytes or PNG data URL).
- Build the answer URL a card's QR code points to.
- Run the CPU-bound encoding off the event loop.
"""
from __future__ import annotations

import base64
import io

import segno
from fastapi import Request
from starlette.concurrency import run_in_threadpool

PNG_SCALE = 4
PNG_BORDER = 4
ERROR_LEVEL = "m"
_DATA_URL_PREFIX = "data:image/png;base64,"


class QRGenerationError(Exception):
    """Raised when a payload cannot be encoded as a QR code."""


def answer_url(request: Request, question_id: int | str) -> str:
    base = f"{request.url.scheme}://{request.url.netloc}"
    return f"{base}/questions/{question_id}/answer"


def _make(text: str) -> segno.QRCode:
    try:
        return segno.make_qr(text, error=ERROR_LEVEL)
    except (segno.DataOverflowError, ValueError) as e:
        raise QRGenerationError(f"Cannot encode {len(text)} character(s) as QR: {e}") from e


def encode_png_sync(text: str) -> bytes:
    buff = io.BytesIO()
    _make(text).save(buff, kind="png", scale=PNG_SCALE, border=PNG_BORDER)
    return buff.getvalue()


def encode_data_url_sync(text: str) -> str:
    return _make(text).png_data_uri(scale=PNG_SCALE, border=PNG_BORDER)


async def encode_png(text: str) -> bytes:
    return await run_in_threadpool(encode_png_sync, text)


async def encode_data_url(text: str) -> str:
    return await run_in_threadpool(encode_data_url_sync, text)


def decode_data_url(data_url: str) -> bytes:
    if not data_url.startswith(_DATA_URL_PREFIX):
        raise QRGenerationError("Not a base64 PNG data URL")
    try:
        return base64.b64decode(data_url[len(_DATA_URL_PREFIX):], validate=True)
    except ValueError as e:
        raise QRGenerationError(f"Malformed PNG data URL: {e}") from e
