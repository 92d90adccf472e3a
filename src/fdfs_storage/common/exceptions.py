"""
异常体系。
每个异常携带 code + severity。路径工具函数本身不抛异常。
"""
from __future__ import annotations


class StorageError(Exception):
    """基类异常。"""
    code: str = "STORAGE_ERROR"
    severity: str = "error"

    def __init__(self, message: str = "", code: str | None = None):
        self.message = message
        if code:
            self.code = code
        super().__init__(message)

    def to_dict(self) -> dict:
        return {"error_code": self.code, "message": self.message, "severity": self.severity}


# === 路径 / 配置 ===
class InvalidStorePathError(StorageError):
    code = "INVALID_STORE_PATH"; severity = "warning"

class StorageNotEnabledError(StorageError):
    code = "STORAGE_NOT_ENABLED"; severity = "warning"


# === 后端 ===
class StorageBackendError(StorageError):
    code = "STORAGE_BACKEND_ERROR"; severity = "critical"

class StoreFileNotFoundError(StorageError):
    code = "STORE_FILE_NOT_FOUND"


# === 本地文件 ===
class FileOperationError(StorageError):
    code = "FILE_OPERATION_ERROR"

class RemoteFetchError(StorageError):
    code = "REMOTE_FETCH_ERROR"

class ThumbnailError(StorageError):
    code = "THUMBNAIL_ERROR"
