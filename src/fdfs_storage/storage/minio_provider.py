"""OSS/S3 兼容对象存储实现 (MinIO 客户端)。每个 group 对应一个 bucket。"""
from __future__ import annotations
import io
from datetime import datetime, timezone

from minio import Minio
from minio.error import S3Error
import structlog

from fdfs_storage.common.exceptions import StorageBackendError, StoreFileNotFoundError
from fdfs_storage.settings import Settings, settings as default_settings
from fdfs_storage.storage.base import FileInfo, new_remote_name, slave_name
from fdfs_storage.storage.store_path import StorePath

logger = structlog.get_logger()

_MISSING_CODES = {"NoSuchKey", "NoSuchBucket", "NoSuchObject"}


class MinioStorageBackend:
    def __init__(self, settings: Settings | None = None, client: Minio | None = None) -> None:
        cfg = settings or default_settings
        self._client = client or Minio(
            endpoint=cfg.oss_upload_endpoint,
            access_key=cfg.oss_access_key_id,
            secret_key=cfg.oss_access_key_secret,
            secure=cfg.oss_secure,
        )
        self._endpoint = cfg.oss_upload_endpoint
        self._group = cfg.fdfs_default_group
        self._buckets: set[str] = set()

    async def ensure_bucket(self, group: str | None = None) -> None:
        bucket = group or self._group
        if not self._client.bucket_exists(bucket):
            self._client.make_bucket(bucket)
            logger.info("oss_bucket_created", bucket=bucket)
        self._buckets.add(bucket)

    def _raise(self, op: str, store_path: StorePath, e: S3Error, missing_ok: bool = True):
        """missing_ok=False 用于写操作: bucket 不存在是后端故障而不是文件不存在。"""
        if missing_ok and e.code in _MISSING_CODES:
            raise StoreFileNotFoundError(f"{store_path} not found") from e
        logger.error("oss_operation_failed", op=op, path=store_path.full_path, code=e.code)
        raise StorageBackendError(f"{op} {store_path} failed: {e.code}") from e

    async def _put(self, store_path: StorePath, data: bytes) -> StorePath:
        try:
            if store_path.group not in self._buckets:
                await self.ensure_bucket(store_path.group)
            self._client.put_object(
                store_path.group, store_path.path, io.BytesIO(data), length=len(data),
            )
        except S3Error as e:
            self._raise("upload", store_path, e, missing_ok=False)
        return store_path

    async def upload(self, data: bytes, ext: str, group: str | None = None) -> StorePath:
        return await self._put(StorePath(group or self._group, new_remote_name(ext)), data)

    async def upload_slave(self, master: StorePath, prefix: str, data: bytes, ext: str) -> StorePath:
        return await self._put(StorePath(master.group, slave_name(master.path, prefix, ext)), data)

    async def download(self, store_path: StorePath) -> bytes:
        try:
            resp = self._client.get_object(store_path.group, store_path.path)
        except S3Error as e:
            self._raise("download", store_path, e)
        try:
            return resp.read()
        finally:
            resp.close()
            resp.release_conn()

    async def delete(self, store_path: StorePath) -> None:
        try:
            self._client.remove_object(store_path.group, store_path.path)
        except S3Error as e:
            self._raise("delete", store_path, e)

    async def query_file_info(self, store_path: StorePath) -> FileInfo | None:
        try:
            stat = self._client.stat_object(store_path.group, store_path.path)
        except S3Error as e:
            if e.code in _MISSING_CODES:
                return None
            self._raise("stat", store_path, e)
        return FileInfo(
            file_size=stat.size or 0,
            create_time=stat.last_modified or datetime.now(timezone.utc),
            source_ip_addr=self._endpoint,
        )
