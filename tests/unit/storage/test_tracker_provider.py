"""TrackerStorageBackend 测试 (外部 FastDFS 客户端用 MagicMock 替身)。"""
from datetime import datetime, timezone
from types import SimpleNamespace
from unittest.mock import MagicMock
import pytest
from fdfs_storage.common.exceptions import StorageBackendError, StoreFileNotFoundError
from fdfs_storage.storage.store_path import StorePath
from fdfs_storage.storage.tracker_provider import TrackerStorageBackend


@pytest.mark.asyncio
async def test_upload_parses_file_id(mock_tracker):
    backend = TrackerStorageBackend(mock_tracker)
    sp = await backend.upload(b"data", "txt")
    assert sp == StorePath("group2", "M00/00/00/abc.txt")
    mock_tracker.upload_buffer.assert_called_once_with(b"data", "txt")


@pytest.mark.asyncio
async def test_upload_slave(mock_tracker):
    backend = TrackerStorageBackend(mock_tracker)
    master = StorePath("group2", "M00/00/00/abc.jpg")
    sp = await backend.upload_slave(master, "_150x150", b"t", "jpg")
    assert sp.path.endswith("abc_150x150.jpg")
    mock_tracker.upload_slave_buffer.assert_called_once_with(
        "group2/M00/00/00/abc.jpg", "_150x150", b"t", "jpg")


@pytest.mark.asyncio
async def test_download_and_delete(mock_tracker):
    backend = TrackerStorageBackend(mock_tracker)
    sp = StorePath("group2", "M00/x.bin")
    assert await backend.download(sp) == b"payload"
    await backend.delete(sp)
    mock_tracker.delete_file.assert_called_once_with("group2/M00/x.bin")


@pytest.mark.asyncio
async def test_client_errors_wrapped(mock_tracker):
    mock_tracker.download_file = MagicMock(side_effect=ConnectionError("tracker offline"))
    backend = TrackerStorageBackend(mock_tracker)
    with pytest.raises(StorageBackendError):
        await backend.download(StorePath("group2", "M00/x.bin"))


@pytest.mark.asyncio
async def test_missing_file(mock_tracker):
    mock_tracker.delete_file = MagicMock(side_effect=FileNotFoundError("gone"))
    mock_tracker.get_file_info = MagicMock(side_effect=FileNotFoundError("gone"))
    backend = TrackerStorageBackend(mock_tracker)
    sp = StorePath("group2", "M00/x.bin")
    with pytest.raises(StoreFileNotFoundError):
        await backend.delete(sp)
    assert await backend.query_file_info(sp) is None


@pytest.mark.asyncio
async def test_query_file_info(mock_tracker):
    created = datetime(2024, 1, 2, tzinfo=timezone.utc)
    mock_tracker.get_file_info = MagicMock(return_value=SimpleNamespace(
        file_size=10, create_time=created, crc32=99, source_ip_addr="10.0.0.5"))
    info = await TrackerStorageBackend(mock_tracker).query_file_info(StorePath("group2", "M00/x"))
    assert info.file_size == 10
    assert info.crc32 == 99
    assert info.source_ip_addr == "10.0.0.5"


class FastDFSFileNotFound(Exception):
    """模拟客户端库自带的 not-found 异常 (非内置 FileNotFoundError)。"""


@pytest.mark.asyncio
async def test_custom_not_found_errors(mock_tracker):
    mock_tracker.delete_file = MagicMock(side_effect=FastDFSFileNotFound("gone"))
    mock_tracker.get_file_info = MagicMock(side_effect=FastDFSFileNotFound("gone"))
    backend = TrackerStorageBackend(mock_tracker, not_found_errors=(FastDFSFileNotFound,))
    sp = StorePath("group2", "M00/x.bin")
    with pytest.raises(StoreFileNotFoundError):
        await backend.delete(sp)
    assert await backend.query_file_info(sp) is None


@pytest.mark.asyncio
async def test_unregistered_not_found_is_backend_error(mock_tracker):
    mock_tracker.get_file_info = MagicMock(side_effect=FastDFSFileNotFound("gone"))
    with pytest.raises(StorageBackendError):
        await TrackerStorageBackend(mock_tracker).query_file_info(StorePath("group2", "M00/x"))
