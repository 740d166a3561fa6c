from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional, Union

from PySide6.QtCore import QByteArray, QSettings

from .logger import get_logger

logger = get_logger("storage")

ORGANIZATION = "QuoteKeeper"
APPLICATION = "QuoteKeeper"


class PersistenceError(OSError):
    """写入本地存储失败（磁盘已满、权限不足等）。"""


class KeyValueStorage:
    """按字符串键存取字节块的最小接口。"""

    def get(self, key: str) -> Optional[bytes]:
        raise NotImplementedError

    def set(self, key: str, data: bytes) -> None:
        raise NotImplementedError


class MemoryStorage(KeyValueStorage):
    def __init__(self, initial: Optional[Dict[str, bytes]] = None) -> None:
        self.data: Dict[str, bytes] = dict(initial or {})

    def get(self, key: str) -> Optional[bytes]:
        return self.data.get(key)

    def set(self, key: str, data: bytes) -> None:
        self.data[key] = bytes(data)


class QSettingsStorage(KeyValueStorage):
    """QSettings 支持的持久化。默认写入系统偏好设置，也可以指定 INI 文件。"""

    def __init__(self, path: Optional[Union[str, Path]] = None, group: str = "Library") -> None:
        if path is not None:
            path = Path(path)
            path.parent.mkdir(parents=True, exist_ok=True)
            self.settings = QSettings(str(path), QSettings.Format.IniFormat)
        else:
            self.settings = QSettings(ORGANIZATION, APPLICATION)
        self.group = group

    def get(self, key: str) -> Optional[bytes]:
        self.settings.beginGroup(self.group)
        value = self.settings.value(key)
        self.settings.endGroup()
        if value is None:
            return None
        if isinstance(value, QByteArray):
            return bytes(value.data())
        if isinstance(value, (bytes, bytearray)):
            return bytes(value)
        if isinstance(value, str):
            return value.encode("utf-8")
        logger.warning("Unexpected value type %s stored under %r", type(value).__name__, key)
        return None

    def set(self, key: str, data: bytes) -> None:
        self.settings.beginGroup(self.group)
        self.settings.setValue(key, QByteArray(data))
        self.settings.endGroup()
        self.settings.sync()
        status = self.settings.status()
        if status != QSettings.Status.NoError:
            raise PersistenceError(f"Could not write {key!r} to {self.settings.fileName()}: {status.name}")

    def clear(self) -> None:
        self.settings.beginGroup(self.group)
        self.settings.remove("")
        self.settings.endGroup()
        self.settings.sync()
