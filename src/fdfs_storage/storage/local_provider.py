"""本地文件存储 (开发环境 / 无 tracker 时)。按 FastDFS 风格生成 group/M00/... 路径。"""
import os
import zlib
from datetime import datetime, timezone
from pathlib import Path

import aiofiles
import structlog

from fdfs_storage.common.exceptions import (
    InvalidStorePathError, StorageBackendError, StoreFileNotFoundError,
)
from fdfs_storage.storage.base import FileInfo, new_remote_name, slave_name
from fdfs_storage.storage.store_path import StorePath

logger = structlog.get_logger()


class LocalStorageBackend:
    def __init__(self, base_dir: str = "/tmp/fdfs-storage", group: str = "group1"):
        self.base_dir = Path(base_dir).resolve(); os.makedirs(self.base_dir, exist_ok=True)
        self.group = group

    def _resolve(self, store_path: StorePath) -> Path:
        full = (self.base_dir / store_path.group / store_path.path).resolve()
        if not full.is_relative_to(self.base_dir):
            raise InvalidStorePathError(f"{store_path} escapes storage root")
        return full

    def _fail(self, op: str, store_path: StorePath, e: OSError) -> StorageBackendError:
        logger.error("local_operation_failed", op=op, path=store_path.full_path, error=str(e))
        return StorageBackendError(f"{op} {store_path} failed: {e}")

    async def _write(self, store_path: StorePath, data: bytes) -> StorePath:
        full = self._resolve(store_path)
        try:
            os.makedirs(full.parent, exist_ok=True)
            async with aiofiles.open(full, "wb") as f:
                await f.write(data)
        except OSError as e:
            raise self._fail("upload", store_path, e) from e
        logger.info("local_file_saved", path=store_path.full_path, size=len(data))
        return store_path

    async def upload(self, data: bytes, ext: str, group: str | None = None) -> StorePath:
        return await self._write(StorePath(group or self.group, new_remote_name(ext)), data)

    async def upload_slave(self, master: StorePath, prefix: str, data: bytes, ext: str) -> StorePath:
        return await self._write(StorePath(master.group, slave_name(master.path, prefix, ext)), data)

    async def download(self, store_path: StorePath) -> bytes:
        try:
            async with aiofiles.open(self._resolve(store_path), "rb") as f:
                return await f.read()
        except FileNotFoundError as e:
            raise StoreFileNotFoundError(f"{store_path} not found") from e
        except OSError as e:
            raise self._fail("download", store_path, e) from e

    async def delete(self, store_path: StorePath) -> None:
        try: os.remove(self._resolve(store_path))
        except FileNotFoundError as e:
            raise StoreFileNotFoundError(f"{store_path} not found") from e
        except OSError as e:
            raise self._fail("delete", store_path, e) from e

    async def query_file_info(self, store_path: StorePath) -> FileInfo | None:
        full = self._resolve(store_path)
        if not full.is_file():
            return None
        async with aiofiles.open(full, "rb") as f:
            crc = zlib.crc32(await f.read())
        stat = full.stat()
        return FileInfo(
            file_size=stat.st_size,
            create_time=datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc),
            crc32=crc,
            source_ip_addr="127.0.0.1",
        )
