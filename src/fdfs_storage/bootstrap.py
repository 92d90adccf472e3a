"""
存储客户端装配入口。

    async with storage_lifespan() as client:
        path = await client.upload_bytes(b"...", "txt")

fdfs_enabled=false 时 yield None。
后端选择: 传入 tracker_client → FastDFS tracker; oss_enabled → OSS; 否则本地目录。
"""
from __future__ import annotations
from contextlib import asynccontextmanager
from typing import AsyncIterator

import structlog

from fdfs_storage.common.exceptions import StorageNotEnabledError
from fdfs_storage.logging_config import configure_logging
from fdfs_storage.settings import Settings, settings as default_settings
from fdfs_storage.storage.base import StorageBackend
from fdfs_storage.storage.fastdfs_client import FastDFSClient
from fdfs_storage.storage.local_provider import LocalStorageBackend
from fdfs_storage.storage.thumbnail import ThumbImageConfig
from fdfs_storage.storage.tracker_provider import TrackerClient, TrackerStorageBackend


def create_backend(settings: Settings, tracker_client: TrackerClient | None = None) -> StorageBackend:
    if tracker_client is not None:
        return TrackerStorageBackend(tracker_client)
    if settings.oss_enabled:
        from fdfs_storage.storage.minio_provider import MinioStorageBackend
        return MinioStorageBackend(settings)
    return LocalStorageBackend(settings.local_storage_dir, settings.fdfs_default_group)


def create_fastdfs_client(settings: Settings, backend: StorageBackend) -> FastDFSClient:
    if not settings.fdfs_enabled:
        raise StorageNotEnabledError("FastDFS client requested while fdfs_enabled=false")
    return FastDFSClient(
        backend,
        web_server_url=settings.fdfs_web_server_url,
        thumb=ThumbImageConfig(settings.fdfs_thumb_width, settings.fdfs_thumb_height),
        tmp_dir=settings.tmp_dir,
    )


@asynccontextmanager
async def storage_lifespan(
    settings: Settings | None = None,
    tracker_client: TrackerClient | None = None,
    backend: StorageBackend | None = None,
) -> AsyncIterator[FastDFSClient | None]:
    cfg = settings or default_settings
    configure_logging(cfg)
    log = structlog.get_logger()

    if not cfg.fdfs_enabled:
        log.info("fdfs_disabled")
        yield None
        return

    backend = backend or create_backend(cfg, tracker_client)
    ensure_bucket = getattr(backend, "ensure_bucket", None)
    if ensure_bucket is not None:
        await ensure_bucket()
    client = create_fastdfs_client(cfg, backend)
    log.info("fdfs_client_ready", backend=type(backend).__name__,
             web_server=cfg.fdfs_web_server_url)
    try:
        yield client
    finally:
        log.info("fdfs_client_shutdown")
