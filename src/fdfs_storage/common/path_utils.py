"""
路径标准化与路径片段工具。

纯函数, 无 I/O, 无共享状态, 对任意输入不抛异常。
- 兼容 classpath: / file: 前缀 (忽略大小写)
- / 与 \\ 统一为 /
- 解析 . 与 .. ; 超出根的 .. 直接丢弃
"""
from __future__ import annotations
import re

SLASH = "/"
DOT = "."
DOUBLE_DOT = ".."
SCHEME_PREFIXES = ("classpath:", "file:")

_SEPARATORS = re.compile(r"[/\\]+")
_DRIVE = re.compile(r"^/?([A-Za-z]:)(?=/)")
_PREFIX = re.compile(r"^(?:[A-Za-z]:(?=/))?/?")
_ABSOLUTE = re.compile(r"^[a-zA-Z]:[/\\]")


def _remove_start_ignore_case(text: str, prefix: str) -> str:
    if text[:len(prefix)].lower() == prefix.lower():
        return text[len(prefix):]
    return text


def _normalize_once(path: str) -> str:
    path_to_use = path
    for scheme in SCHEME_PREFIXES:
        path_to_use = _remove_start_ignore_case(path_to_use, scheme)
    path_to_use = _SEPARATORS.sub(SLASH, path_to_use).strip()

    # Windows 盘符, 同时去掉 /C: 开头多余的斜杠
    prefix = ""
    m = _DRIVE.match(path_to_use)
    if m:
        prefix = m.group(1)
        path_to_use = path_to_use[m.end():]
    if path_to_use.startswith(SLASH):
        prefix += SLASH
        path_to_use = path_to_use[1:]

    elements: list[str] = []
    tops = 0
    for element in reversed([e for e in path_to_use.split(SLASH) if e]):
        if element == DOT:
            continue
        if element == DOUBLE_DOT:
            tops += 1
        elif tops > 0:
            tops -= 1
        else:
            elements.insert(0, element)
    return prefix + SLASH.join(elements)


def normalize(path: str | None) -> str | None:
    """修复路径。None → None, 空串 → 空串。结果是幂等的。"""
    if path is None:
        return None
    result = _normalize_once(path)
    # 去前缀/去空白后可能暴露出新的前缀, 重复至不动点
    while True:
        again = _normalize_once(result)
        if again == result:
            return result
        result = again


def split_prefix(path: str | None) -> tuple[str, list[str]]:
    """标准化后拆成 (前缀, 片段列表)。前缀为 ''、'/'、'C:' 或 'C:/'。"""
    normalized = normalize(path) or ""
    m = _PREFIX.match(normalized)
    prefix = m.group(0) if m else ""
    rest = normalized[len(prefix):]
    return prefix, [e for e in rest.split(SLASH) if e]


def segments(path: str | None) -> list[str]:
    return split_prefix(path)[1]


def sub_path(base_path: str | None, full_path: str | None) -> str | None:
    """
    获得相对子路径, 忽略大小写。
    base_path 不是前缀时返回标准化后的 full_path。
    """
    if not base_path or not full_path:
        return full_path

    base = normalize(base_path)
    if base.endswith(SLASH):
        base = base[:-1]
    full = normalize(full_path)

    if full.lower().startswith(base.lower()):
        result = full[len(base):]
        return result[1:] if result.startswith(SLASH) else result
    return full


def sub_segments(path: str | None, from_index: int, to_index: int) -> list[str] | None:
    """
    获取指定区间的路径片段, 支持负数 (-1 表示倒数第一个)。
    from_index 包含, to_index 不包含; 区间为空返回 None。
    """
    if path is None:
        return None
    elements = segments(path)
    length = len(elements)

    if from_index < 0:
        from_index = max(length + from_index, 0)
    elif from_index > length:
        from_index = length

    if to_index < 0:
        to_index = length + to_index
        if to_index < 0:
            to_index = length
    elif to_index > length:
        to_index = length

    if to_index < from_index:
        from_index, to_index = to_index, from_index
    if from_index == to_index:
        return None
    return elements[from_index:to_index]


def path_segment(path: str | None, index: int) -> str | None:
    """获取指定位置的路径片段, 支持负数。越界返回 None。"""
    if path is None:
        return None
    elements = segments(path)
    if index < 0:
        index += len(elements)
    if 0 <= index < len(elements):
        return elements[index]
    return None


def last_segment(path: str | None) -> str | None:
    return path_segment(path, -1)


def parent_path(path: str | None, level: int = 1) -> str | None:
    """去掉末尾 level 个片段。全部去掉时只剩前缀。"""
    if path is None:
        return None
    if level < 1:
        return normalize(path)
    prefix, elements = split_prefix(path)
    return prefix + SLASH.join(elements[:max(len(elements) - level, 0)])


def is_absolute_path(path: str | None) -> bool:
    """
    是否已经是绝对路径。不做标准化, 建议先 normalize()。
    """
    if not path or not path.strip():
        return False
    return path[0] == SLASH or bool(_ABSOLUTE.match(path))


def main_name(file_name: str | None) -> str | None:
    """主文件名 (去掉最后一个扩展名)。"""
    if not file_name or not file_name.strip() or DOT not in file_name:
        return file_name
    return file_name[:file_name.rindex(DOT)]


def ext_name(file_name: str | None) -> str | None:
    """扩展名, 不带 "."; 扩展名里不能出现路径分隔符。"""
    if file_name is None:
        return None
    index = file_name.rfind(DOT)
    if index == -1:
        return None
    ext = file_name[index + 1:]
    return None if (SLASH in ext or "\\" in ext) else ext


def path_ends_with(path: str | None, suffix: str) -> bool:
    if path is None:
        return False
    return path.lower().endswith(suffix.lower())
