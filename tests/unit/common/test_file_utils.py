"""本地文件工具测试。"""
import io
import os
import pytest
from fdfs_storage.common import file_utils
from fdfs_storage.common.exceptions import FileOperationError


def test_readable_file_size():
    assert file_utils.readable_file_size(0) == "0"
    assert file_utils.readable_file_size(-5) == "0"
    assert file_utils.readable_file_size(512) == "512 B"
    assert file_utils.readable_file_size(1024) == "1 KB"
    assert file_utils.readable_file_size(1536) == "1.5 KB"
    assert file_utils.readable_file_size(5 * 1024 ** 3) == "5 GB"
    assert file_utils.readable_file_size(2048 * 1024 ** 4) == "2,048 TB"


def test_mkdirs_dir_and_file(tmp_path):
    d = file_utils.mkdirs(tmp_path / "a" / "b")
    assert d.is_dir()
    f = file_utils.mkdirs(tmp_path / "c" / "d.txt", is_file=True)
    assert f.is_file()


def test_text_round(tmp_path):
    p = tmp_path / "t.txt"
    file_utils.write_text(p, "第一行\n")
    file_utils.write_text(p, "second", append=True)
    assert file_utils.read_text(p) == "第一行\nsecond"
    file_utils.write_text_lines(p, ["x", "y"])
    assert file_utils.read_text_lines(p) == ["x", "y"]


def test_read_missing_raises(tmp_path):
    with pytest.raises(FileOperationError) as exc:
        file_utils.read_text(tmp_path / "nope.txt")
    assert isinstance(exc.value.__cause__, FileNotFoundError)
    assert exc.value.to_dict()["error_code"] == "FILE_OPERATION_ERROR"


def test_bytes_to_file_creates_dir(tmp_path):
    p = file_utils.bytes_to_file(b"abc", tmp_path / "new", "x.bin")
    assert p.read_bytes() == b"abc"


def test_copy_and_move_replace(tmp_path):
    src = tmp_path / "src.txt"; src.write_text("one")
    dst = tmp_path / "dst.txt"; dst.write_text("old")
    file_utils.copy_file(src, dst)
    assert dst.read_text() == "one"
    moved = file_utils.move_file(src, dst)
    assert moved == dst
    assert not src.exists()


def test_stream_copies(tmp_path):
    src = tmp_path / "s.bin"; src.write_bytes(b"data")
    buf = io.BytesIO()
    file_utils.copy_to_stream(src, buf)
    assert buf.getvalue() == b"data"
    out = file_utils.copy_from_stream(io.BytesIO(b"more"), tmp_path / "o.bin")
    assert out.read_bytes() == b"more"


def test_delete(tmp_path):
    f = tmp_path / "f.txt"; f.write_text("x")
    file_utils.delete(f)
    assert not f.exists()
    file_utils.delete(f)  # 不存在也不报错
    d = tmp_path / "d"; d.mkdir(); (d / "x").write_text("x")
    with pytest.raises(FileOperationError):
        file_utils.delete(d)
    file_utils.delete_directory(d)
    assert not d.exists()


def test_content_equals(tmp_path):
    a = tmp_path / "a"; a.write_bytes(b"12345")
    b = tmp_path / "b"; b.write_bytes(b"12345")
    c = tmp_path / "c"; c.write_bytes(b"12346")
    assert file_utils.content_equals(a, b)
    assert not file_utils.content_equals(a, c)
    assert not file_utils.content_equals(a, tmp_path / "missing")
    assert file_utils.content_equals(tmp_path / "m1", tmp_path / "m2")
    with pytest.raises(FileOperationError):
        file_utils.content_equals(tmp_path, tmp_path)


def test_is_same_file(tmp_path):
    a = tmp_path / "a"; a.write_text("x")
    assert file_utils.is_same_file(a, tmp_path / "." / "a")
    assert not file_utils.is_same_file(a, tmp_path / "missing")
    assert file_utils.is_same_file(tmp_path / "m", tmp_path / "sub" / ".." / "m")


def test_is_modified(tmp_path):
    f = tmp_path / "f"; f.write_text("x")
    mtime = f.stat().st_mtime
    assert not file_utils.is_modified(f, mtime)
    assert file_utils.is_modified(f, mtime - 10)
    assert file_utils.is_modified(tmp_path / "missing", mtime)


def test_predicates(tmp_path):
    f = tmp_path / "f"; f.write_text("x")
    assert file_utils.is_file(f) and not file_utils.is_directory(f)
    assert file_utils.is_directory(tmp_path)
    assert not file_utils.is_file(None)
    assert file_utils.is_readable(f) and file_utils.is_writable(f)
    assert file_utils.absolute_path(None) is None
    assert file_utils.absolute_path(f) == str(f.resolve())


def test_create_temp_file(tmp_path):
    p = file_utils.create_temp_file(tmp_path / "tmpdir", "pre", ".suf")
    assert p.exists()
    assert p.name.startswith("pre") and p.name.endswith(".suf")


def test_file_size(tmp_path):
    f = tmp_path / "f"; f.write_bytes(os.urandom(2048))
    assert file_utils.file_size(f) == "2 KB"
    with pytest.raises(FileOperationError):
        file_utils.file_size(tmp_path / "missing")
