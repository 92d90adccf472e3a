"""UUID 工具。"""
from __future__ import annotations
import uuid as _uuid


def uuid() -> str:
    """32 位无 "-" 的随机 UUID。"""
    return _uuid.uuid4().hex
