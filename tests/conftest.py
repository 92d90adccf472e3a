"""全局 pytest fixtures: 本地目录后端 + 测试图片。"""
import pytest
import fitz
from unittest.mock import MagicMock

from fdfs_storage.settings import Settings
from fdfs_storage.storage.fastdfs_client import FastDFSClient
from fdfs_storage.storage.local_provider import LocalStorageBackend
from fdfs_storage.storage.thumbnail import ThumbImageConfig


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    return Settings(
        _env_file=None,
        fdfs_enabled=True,
        fdfs_web_server_url="fdfs.example.com:8888",
        local_storage_dir=str(tmp_path / "store"),
        tmp_dir=str(tmp_path / "tmp"),
    )


@pytest.fixture
def local_backend(tmp_path) -> LocalStorageBackend:
    return LocalStorageBackend(str(tmp_path / "store"))


@pytest.fixture
def fdfs_client(local_backend, tmp_path) -> FastDFSClient:
    return FastDFSClient(
        local_backend,
        web_server_url="fdfs.example.com:8888",
        thumb=ThumbImageConfig(150, 150),
        tmp_dir=tmp_path / "tmp",
    )


def _image(width: int, height: int, fmt: str) -> bytes:
    pix = fitz.Pixmap(fitz.csRGB, fitz.IRect(0, 0, width, height), False)
    pix.clear_with(180)
    return pix.tobytes(fmt)


@pytest.fixture
def png_bytes() -> bytes:
    return _image(400, 200, "png")


@pytest.fixture
def small_png_bytes() -> bytes:
    return _image(60, 40, "png")


@pytest.fixture
def mock_tracker():
    tracker = MagicMock()
    tracker.upload_buffer = MagicMock(return_value="group2/M00/00/00/abc.txt")
    tracker.upload_slave_buffer = MagicMock(return_value="group2/M00/00/00/abc_150x150.jpg")
    tracker.download_file = MagicMock(return_value=b"payload")
    tracker.delete_file = MagicMock(return_value=None)
    return tracker
