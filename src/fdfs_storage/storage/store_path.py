"""
FastDFS 文件路径: group + path。

    group1/M00/00/00/wKgBZ1xxx.jpg
    http://192.168.1.100:8888/group1/M00/00/00/wKgBZ1xxx.jpg
"""
from __future__ import annotations
import re
from dataclasses import dataclass

from fdfs_storage.common.exceptions import InvalidStorePathError
from fdfs_storage.common.path_utils import SLASH, segments

GROUP_MARK = "group"
_URL_PREFIX = re.compile(r"^https?://[^/]*/?", re.IGNORECASE)


@dataclass(frozen=True)
class StorePath:
    group: str
    path: str

    @property
    def full_path(self) -> str:
        return f"{self.group}{SLASH}{self.path}"

    def __str__(self) -> str:
        return self.full_path

    @classmethod
    def parse(cls, file_path: str | None) -> "StorePath":
        """从 full path 或访问 URL 解析; 第一个包含 "group" 的片段为组名。"""
        if not file_path or not file_path.strip():
            raise InvalidStorePathError("Store path must not be empty")

        elements = segments(_URL_PREFIX.sub("", file_path.strip()))
        if len(elements) < 2:
            raise InvalidStorePathError(
                f"Expected store path like group/path, got {file_path}")
        for i, element in enumerate(elements[:-1]):
            if GROUP_MARK in element:
                return cls(element, SLASH.join(elements[i + 1:]))
        raise InvalidStorePathError(f"No group found in {file_path}")
