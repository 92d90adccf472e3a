"""存储后端契约。FastDFS 协议本身由外部库/服务提供。"""
from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol, runtime_checkable

from fdfs_storage.common.uuid_utils import uuid
from fdfs_storage.storage.store_path import StorePath

STORE_PATH_ROOT = "M00"


@dataclass
class FileInfo:
    file_size: int
    create_time: datetime
    crc32: int = 0
    source_ip_addr: str = ""


@runtime_checkable
class StorageBackend(Protocol):
    async def upload(self, data: bytes, ext: str, group: str | None = None) -> StorePath: ...

    async def upload_slave(
        self, master: StorePath, prefix: str, data: bytes, ext: str,
    ) -> StorePath: ...

    async def download(self, store_path: StorePath) -> bytes: ...

    async def delete(self, store_path: StorePath) -> None: ...

    async def query_file_info(self, store_path: StorePath) -> FileInfo | None: ...


def new_remote_name(ext: str) -> str:
    """生成 M00/AB/CD/{uuid}.{ext} 形式的存储名。"""
    name = uuid()
    suffix = f".{ext.lstrip('.')}" if ext else ""
    return f"{STORE_PATH_ROOT}/{name[:2].upper()}/{name[2:4].upper()}/{name}{suffix}"


def slave_name(master_path: str, prefix: str, ext: str) -> str:
    """从文件名 = 主文件名(去扩展名) + prefix + .ext"""
    head, _, tail = master_path.rpartition("/")
    stem = tail.rsplit(".", 1)[0] if "." in tail else tail
    suffix = f".{ext.lstrip('.')}" if ext else ""
    return f"{head}/{stem}{prefix}{suffix}" if head else f"{stem}{prefix}{suffix}"
