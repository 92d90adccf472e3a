"""StorePath 解析测试。"""
import pytest
from fdfs_storage.common.exceptions import InvalidStorePathError
from fdfs_storage.storage.store_path import StorePath


def test_parse_full_path():
    sp = StorePath.parse("group1/M00/00/00/wKgBZ1abc.jpg")
    assert sp.group == "group1"
    assert sp.path == "M00/00/00/wKgBZ1abc.jpg"
    assert sp.full_path == "group1/M00/00/00/wKgBZ1abc.jpg"
    assert str(sp) == sp.full_path


def test_parse_access_url():
    sp = StorePath.parse("http://192.168.1.100:8888/group2/M00/01/02/x.png")
    assert sp == StorePath("group2", "M00/01/02/x.png")
    assert StorePath.parse("HTTPS://cdn.example.com/group1/M00/a.txt").group == "group1"


def test_parse_normalizes():
    sp = StorePath.parse("/group1\\M00//00/./x/../y.txt")
    assert sp.full_path == "group1/M00/00/y.txt"


def test_group_found_after_other_segments():
    assert StorePath.parse("files/mygroup3/M00/z.bin").group == "mygroup3"


@pytest.mark.parametrize("bad", ["", "   ", None, "group1", "a/b/c", "M00/group1"])
def test_parse_invalid(bad):
    with pytest.raises(InvalidStorePathError):
        StorePath.parse(bad)
