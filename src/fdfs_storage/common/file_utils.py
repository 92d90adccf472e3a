"""
本地文件工具。

失败时记录日志并抛 FileOperationError (保留原始 OSError),
不返回静默的 False/None。
"""
from __future__ import annotations
import math
import os
import shutil
import tempfile
from pathlib import Path
from typing import BinaryIO

import structlog

from fdfs_storage.common.exceptions import FileOperationError
from fdfs_storage.common.system_utils import is_linux

logger = structlog.get_logger()

PathLike = str | os.PathLike
SIZE_UNITS = ("B", "KB", "MB", "GB", "TB")
COMPARE_CHUNK = 64 * 1024


def _fail(op: str, path: PathLike, exc: Exception) -> FileOperationError:
    logger.error("file_operation_failed", op=op, path=str(path), error=str(exc))
    return FileOperationError(f"{op} failed for {path}: {exc}")


def absolute_path(path: PathLike | None) -> str | None:
    """标准绝对路径; 解析失败时退回 absolute()。"""
    if path is None:
        return None
    p = Path(path)
    try:
        return str(p.resolve())
    except (OSError, RuntimeError):
        return str(p.absolute())


def exists(path: PathLike | None) -> bool:
    return path is not None and Path(path).exists()


def is_directory(path: PathLike | None) -> bool:
    return path is not None and Path(path).is_dir()


def is_file(path: PathLike | None) -> bool:
    return path is not None and Path(path).is_file()


def path_equals(path1: PathLike, path2: PathLike) -> bool:
    """绝对路径是否相同。Linux 区分大小写, 其他系统不区分。"""
    a, b = absolute_path(path1), absolute_path(path2)
    if is_linux():
        return a == b
    return a.lower() == b.lower()


def is_same_file(path1: PathLike, path2: PathLike) -> bool:
    """两个路径是否指向同一个文件或目录。"""
    e1, e2 = exists(path1), exists(path2)
    if not e1 or not e2:
        # 都不存在时比较路径, 一个存在一个不存在一定不同
        return not e1 and not e2 and path_equals(path1, path2)
    try:
        return os.path.samefile(path1, path2)
    except OSError as e:
        raise _fail("is_same_file", path1, e) from e


def content_equals(path1: PathLike, path2: PathLike) -> bool:
    """先比较长度, 长度一致再比较内容。"""
    e1 = exists(path1)
    if e1 != exists(path2):
        return False
    if not e1:
        return True
    if is_directory(path1) or is_directory(path2):
        raise FileOperationError("Can't compare directories, only files")

    p1, p2 = Path(path1), Path(path2)
    if p1.stat().st_size != p2.stat().st_size:
        return False
    if is_same_file(p1, p2):
        return True

    try:
        with open(p1, "rb") as f1, open(p2, "rb") as f2:
            while True:
                b1, b2 = f1.read(COMPARE_CHUNK), f2.read(COMPARE_CHUNK)
                if b1 != b2:
                    return False
                if not b1:
                    return True
    except OSError as e:
        raise _fail("content_equals", path1, e) from e


def is_modified(path: PathLike | None, last_modify_time: float) -> bool:
    """文件不存在视为已改动。"""
    if not exists(path):
        return True
    return Path(path).stat().st_mtime != last_modify_time


def mkdirs(path: PathLike, is_file: bool = False) -> Path:
    """创建目录; is_file=True 时创建父目录及空文件。"""
    p = Path(path)
    try:
        if is_file:
            p.parent.mkdir(parents=True, exist_ok=True)
            p.touch(exist_ok=True)
        else:
            p.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise _fail("mkdirs", p, e) from e
    return p


def read_text(path: PathLike) -> str:
    try:
        return Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise _fail("read_text", path, e) from e


def read_text_lines(path: PathLike) -> list[str]:
    return read_text(path).splitlines()


def write_text(path: PathLike, content: str, append: bool = False) -> Path:
    p = Path(path)
    try:
        with open(p, "a" if append else "w", encoding="utf-8") as f:
            f.write(content)
    except OSError as e:
        raise _fail("write_text", p, e) from e
    return p


def write_text_lines(path: PathLike, lines: list[str]) -> Path:
    return write_text(path, "".join(f"{line}\n" for line in lines))


def bytes_to_file(data: bytes, dir_path: PathLike, file_name: str) -> Path:
    target = mkdirs(dir_path) / file_name
    try:
        target.write_bytes(data)
    except OSError as e:
        raise _fail("bytes_to_file", target, e) from e
    return target


def copy_file(source: PathLike, target: PathLike) -> Path:
    """拷贝文件, 目标存在则替换。"""
    try:
        return Path(shutil.copyfile(source, target))
    except OSError as e:
        raise _fail("copy_file", source, e) from e


def copy_to_stream(source: PathLike, stream: BinaryIO) -> Path:
    p = Path(source)
    try:
        with open(p, "rb") as f:
            shutil.copyfileobj(f, stream)
    except OSError as e:
        raise _fail("copy_to_stream", p, e) from e
    return p


def copy_from_stream(stream: BinaryIO, target: PathLike) -> Path:
    p = Path(target)
    try:
        with open(p, "wb") as f:
            shutil.copyfileobj(stream, f)
    except OSError as e:
        raise _fail("copy_from_stream", p, e) from e
    return p


def move_file(source: PathLike, target: PathLike) -> Path:
    """移动文件, 目标存在则替换。"""
    try:
        os.replace(source, target)
    except OSError as e:
        raise _fail("move_file", source, e) from e
    return Path(target)


def delete(path: PathLike) -> None:
    """删除文件或空目录; 不存在视为成功。"""
    p = Path(path)
    try:
        if p.is_dir() and not p.is_symlink():
            p.rmdir()
        else:
            p.unlink(missing_ok=True)
    except OSError as e:
        raise _fail("delete", p, e) from e


def delete_directory(path: PathLike) -> None:
    try:
        shutil.rmtree(path)
    except OSError as e:
        raise _fail("delete_directory", path, e) from e


def create_temp_file(dir_path: PathLike, prefix: str = "", suffix: str = "") -> Path:
    directory = mkdirs(dir_path)
    try:
        fd, name = tempfile.mkstemp(suffix=suffix, prefix=prefix, dir=directory)
    except OSError as e:
        raise _fail("create_temp_file", directory, e) from e
    os.close(fd)
    return Path(name)


def readable_file_size(size: int) -> str:
    """字节数 → 带单位的大小, 如 1,023.5 KB。"""
    if size <= 0:
        return "0"
    digit_groups = min(int(math.log10(size) / math.log10(1024)), len(SIZE_UNITS) - 1)
    value = size / math.pow(1024, digit_groups)
    text = f"{value:,.1f}"
    if text.endswith(".0"):
        text = text[:-2]
    return f"{text} {SIZE_UNITS[digit_groups]}"


def file_size(path: PathLike) -> str:
    try:
        return readable_file_size(Path(path).stat().st_size)
    except OSError as e:
        raise _fail("file_size", path, e) from e


def is_readable(path: PathLike) -> bool:
    return os.access(path, os.R_OK)


def is_writable(path: PathLike) -> bool:
    return os.access(path, os.W_OK)


def is_executable(path: PathLike) -> bool:
    return os.access(path, os.X_OK)
