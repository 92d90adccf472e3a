"""Base64 / 流 / URL 之间的转换。"""
from __future__ import annotations
import base64
import io
import re
import time
from pathlib import Path
from typing import BinaryIO

import httpx
import structlog

from fdfs_storage.common.exceptions import RemoteFetchError
from fdfs_storage.common.file_utils import PathLike, bytes_to_file
from fdfs_storage.common.uuid_utils import uuid
from fdfs_storage.settings import settings

logger = structlog.get_logger()

JPEG_SUFFIX = ".jpeg"
BASE64_NOISE = re.compile(r"[\s*]")
_DATA_URI = re.compile(r"^data:[^,]*;base64,", re.IGNORECASE)


def clean_base64(data: str) -> str:
    """去掉空白、换行、* 以及 data:*;base64, 头。"""
    return BASE64_NOISE.sub("", _DATA_URI.sub("", data.strip()))


def bytes_to_base64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def base64_to_bytes(data: str) -> bytes:
    return base64.b64decode(clean_base64(data))


def stream_to_base64(stream: BinaryIO) -> str:
    try:
        return bytes_to_base64(stream.read())
    finally:
        stream.close()


def base64_to_stream(data: str) -> io.BytesIO:
    return io.BytesIO(base64_to_bytes(data))


def file_to_base64(path: PathLike) -> str:
    return stream_to_base64(open(path, "rb"))


def base64_to_file(data: str, dir_path: PathLike) -> Path:
    """写成 {uuid}-{毫秒}.jpeg。"""
    file_name = f"{uuid()}-{int(time.time() * 1000)}{JPEG_SUFFIX}"
    return bytes_to_file(base64_to_bytes(data), dir_path, file_name)


async def url_to_bytes(url: str, timeout: float | None = None,
                       transport: httpx.AsyncBaseTransport | None = None) -> bytes:
    """timeout 缺省取 settings.http_timeout_seconds。"""
    if timeout is None:
        timeout = settings.http_timeout_seconds
    try:
        async with httpx.AsyncClient(timeout=timeout, transport=transport,
                                     follow_redirects=True) as client:
            resp = await client.get(url)
            resp.raise_for_status()
            return resp.content
    except httpx.HTTPError as e:
        logger.error("url_fetch_failed", url=url, error=str(e))
        raise RemoteFetchError(f"Fetch {url} failed: {e}") from e


async def url_to_base64(url: str, timeout: float | None = None,
                        transport: httpx.AsyncBaseTransport | None = None) -> str:
    return bytes_to_base64(await url_to_bytes(url, timeout, transport))


async def url_to_file(url: str, dir_path: PathLike, file_name: str, timeout: float | None = None,
                      transport: httpx.AsyncBaseTransport | None = None) -> Path:
    data = await url_to_bytes(url, timeout, transport)
    path = bytes_to_file(data, dir_path, file_name)
    logger.info("url_saved", url=url, path=str(path), size=len(data))
    return path
