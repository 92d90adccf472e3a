"""
FastDFS tracker 后端。

包装一个外部提供的阻塞式 FastDFS 客户端 (tracker/storage 协议由它实现),
调用放到线程池里执行。file_id 形如 group1/M00/00/00/xxx.jpg。
"""
from __future__ import annotations
import asyncio
from typing import Any, Protocol

import structlog

from fdfs_storage.common.exceptions import StorageBackendError, StoreFileNotFoundError
from fdfs_storage.storage.base import FileInfo
from fdfs_storage.storage.store_path import StorePath

logger = structlog.get_logger()


class TrackerClient(Protocol):
    def upload_buffer(self, data: bytes, ext: str, metadata: dict | None = None) -> str: ...
    def upload_slave_buffer(self, master_file_id: str, prefix: str, data: bytes, ext: str) -> str: ...
    def download_file(self, file_id: str) -> bytes: ...
    def delete_file(self, file_id: str) -> None: ...
    def get_file_info(self, file_id: str) -> Any: ...


class TrackerStorageBackend:
    def __init__(
        self,
        client: TrackerClient,
        not_found_errors: tuple[type[BaseException], ...] = (FileNotFoundError,),
    ) -> None:
        """not_found_errors: 客户端表示"文件不存在"的异常类型, 如 fdfs.FileNotFoundError。"""
        self._client = client
        self._not_found_errors = not_found_errors

    async def _call(self, op: str, fn, *args):
        try:
            return await asyncio.to_thread(fn, *args)
        except Exception as e:
            if isinstance(e, self._not_found_errors):
                raise StoreFileNotFoundError(f"{op}: {args[0]} not found") from e
            # 外部客户端的异常类型不可控, 统一包装
            logger.error("tracker_call_failed", op=op, error=str(e))
            raise StorageBackendError(f"{op} failed: {e}") from e

    async def upload(self, data: bytes, ext: str, group: str | None = None) -> StorePath:
        # group 由 tracker 分配
        file_id = await self._call("upload", self._client.upload_buffer, data, ext)
        return StorePath.parse(file_id)

    async def upload_slave(self, master: StorePath, prefix: str, data: bytes, ext: str) -> StorePath:
        file_id = await self._call(
            "upload_slave", self._client.upload_slave_buffer,
            master.full_path, prefix, data, ext,
        )
        return StorePath.parse(file_id)

    async def download(self, store_path: StorePath) -> bytes:
        return await self._call("download", self._client.download_file, store_path.full_path)

    async def delete(self, store_path: StorePath) -> None:
        await self._call("delete", self._client.delete_file, store_path.full_path)

    async def query_file_info(self, store_path: StorePath) -> FileInfo | None:
        try:
            info = await self._call("query", self._client.get_file_info, store_path.full_path)
        except StoreFileNotFoundError:
            return None
        return FileInfo(
            file_size=info.file_size,
            create_time=info.create_time,
            crc32=getattr(info, "crc32", 0),
            source_ip_addr=getattr(info, "source_ip_addr", ""),
        )
