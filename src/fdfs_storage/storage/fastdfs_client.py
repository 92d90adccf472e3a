"""
FastDFS 文件上传下载门面。

所有上传返回 full path (group1/M00/...); with_url=True 时返回
http://{web_server_url}/{full path} 访问地址。
"""
from __future__ import annotations
from pathlib import Path

import structlog

from fdfs_storage.common import codec, file_utils
from fdfs_storage.common.async_io import read_bytes_async
from fdfs_storage.common.exceptions import FileOperationError, StorageError
from fdfs_storage.common.path_utils import SLASH, ext_name
from fdfs_storage.storage.base import FileInfo, StorageBackend
from fdfs_storage.storage.store_path import StorePath
from fdfs_storage.storage.thumbnail import ThumbImageConfig, make_thumbnail

logger = structlog.get_logger()

HTTP_PREFIX = "http://"
HTTPS_PREFIX = "https://"
BASE64_EXT = "jpeg"


class FastDFSClient:
    def __init__(
        self,
        backend: StorageBackend,
        web_server_url: str,
        thumb: ThumbImageConfig | None = None,
        tmp_dir: str | Path | None = None,
    ) -> None:
        self._backend = backend
        self._web_server_url = web_server_url.rstrip(SLASH)
        self._thumb = thumb or ThumbImageConfig()
        self._tmp_dir = Path(tmp_dir) if tmp_dir else None

    @property
    def backend(self) -> StorageBackend:
        return self._backend

    def _result(self, store_path: StorePath, with_url: bool) -> str:
        return self.get_res_access_url(store_path.full_path) if with_url else store_path.full_path

    async def upload_bytes(self, data: bytes, ext: str, with_url: bool = False) -> str:
        store_path = await self._backend.upload(data, ext.lstrip("."))
        logger.info("file_uploaded", path=store_path.full_path, size=len(data))
        return self._result(store_path, with_url)

    async def upload_file(self, path: str | Path, with_url: bool = False) -> str:
        p = Path(path)
        data = await read_bytes_async(p)
        return await self.upload_bytes(data, ext_name(p.name) or "", with_url)

    async def upload_base64(self, data: str, with_url: bool = False) -> str:
        """base64 图片按 .jpeg 上传; 配置了 tmp_dir 时先落盘再上传, 完成后删除。"""
        if self._tmp_dir is None:
            return await self.upload_bytes(codec.base64_to_bytes(data), BASE64_EXT, with_url)

        tmp_file = codec.base64_to_file(data, self._tmp_dir)
        try:
            return await self.upload_file(tmp_file, with_url)
        finally:
            try:
                file_utils.delete(tmp_file)
            except FileOperationError as e:
                logger.warning("tmp_cleanup_failed", path=str(tmp_file), error=str(e))

    async def upload_text(self, content: str, ext: str, with_url: bool = False) -> str:
        return await self.upload_bytes(content.encode("utf-8"), ext, with_url)

    async def upload_image_and_thumb(self, data: bytes, ext: str, with_url: bool = False) -> str:
        """上传图片并生成从文件缩略图, 返回主图路径。"""
        ext = ext.lstrip(".")
        thumb = make_thumbnail(data, ext, self._thumb)
        master = await self._backend.upload(data, ext)
        slave = await self._backend.upload_slave(master, self._thumb.prefix_name, thumb, ext)
        logger.info("image_uploaded", path=master.full_path, thumb=slave.full_path)
        return self._result(master, with_url)

    def get_res_access_url(self, full_path: str) -> str:
        return f"{HTTP_PREFIX}{self._web_server_url}{SLASH}{full_path}"

    def get_thumb_image_path(self, file_path: str) -> str:
        return self._thumb.get_thumb_image_path(file_path)

    def _strip_access_url(self, file_path: str) -> str:
        for scheme in (HTTP_PREFIX, HTTPS_PREFIX):
            prefix = f"{scheme}{self._web_server_url}{SLASH}"
            if file_path.startswith(prefix):
                return file_path[len(prefix):]
        return file_path

    async def download_file(self, file_path: str) -> bytes:
        return await self._backend.download(StorePath.parse(self._strip_access_url(file_path)))

    async def delete_file(self, file_path: str) -> bool:
        """删除文件。失败返回 False 并记录原因。"""
        try:
            store_path = StorePath.parse(self._strip_access_url(file_path))
            await self._backend.delete(store_path)
        except StorageError as e:
            logger.error("file_delete_failed", path=file_path, **e.to_dict())
            return False
        logger.info("file_deleted", path=store_path.full_path)
        return True

    async def find_file_info(self, file_path: str) -> FileInfo | None:
        return await self._backend.query_file_info(
            StorePath.parse(self._strip_access_url(file_path)))
