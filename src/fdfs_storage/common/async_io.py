"""异步文件读写 (aiofiles)。"""
from __future__ import annotations
from pathlib import Path

import aiofiles

from fdfs_storage.common.file_utils import PathLike


async def read_async(path: PathLike, size: int = -1) -> str:
    """读取文本; size=-1 读全部。"""
    async with aiofiles.open(path, "r", encoding="utf-8") as f:
        return await f.read(size)


async def read_bytes_async(path: PathLike) -> bytes:
    async with aiofiles.open(path, "rb") as f:
        return await f.read()


async def write_async(path: PathLike, message: str) -> Path:
    """写入文本, 自动创建父目录, 覆盖已有内容。"""
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    async with aiofiles.open(p, "w", encoding="utf-8") as f:
        await f.write(message)
    return p


async def write_bytes_async(path: PathLike, data: bytes) -> Path:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    async with aiofiles.open(p, "wb") as f:
        await f.write(data)
    return p
