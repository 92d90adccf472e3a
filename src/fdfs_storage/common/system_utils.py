"""运行环境判断。"""
from __future__ import annotations
import platform

LINUX_SYSTEM = "Linux"


def is_linux() -> bool:
    return platform.system().lower() == LINUX_SYSTEM.lower()
