from __future__ import annotations

from enum import Enum
from typing import Optional, Type

from PySide6.QtCore import QObject, QSettings, Signal

from .logger import get_logger
from .models import Language, TextSize, Theme
from .storage import APPLICATION, ORGANIZATION

logger = get_logger("settings")


class PreferenceSetting(QObject):
    """单个偏好项：构造时从 QSettings 读取，修改时立即保存并发出 changed。"""

    changed = Signal(object)

    key: str = ""
    enum_type: Type[Enum] = Enum
    default: Enum

    def __init__(self, settings: QSettings, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self.settings = settings
        self._value = self.default
        self.load()

    @property
    def value(self):
        return self._value

    def load(self) -> None:
        raw = self.settings.value(self.key)
        if raw is None:
            self._value = self.default
            return
        try:
            self._value = self.enum_type(str(raw))
        except ValueError:
            logger.warning("Ignoring unknown %s value %r", self.key, raw)
            self._value = self.default

    def save(self) -> None:
        self.settings.setValue(self.key, self._value.value)
        self.settings.sync()

    def set_value(self, value) -> None:
        value = self.enum_type(value)
        if value == self._value:
            return
        self._value = value
        self.save()
        self.changed.emit(value)


class ThemeSettings(PreferenceSetting):
    key = "selectedTheme"
    enum_type = Theme
    default = Theme.LIGHT


class TextSizeSettings(PreferenceSetting):
    key = "selectedTextSize"
    enum_type = TextSize
    default = TextSize.STANDARD


class LanguageSettings(PreferenceSetting):
    key = "appLanguage"
    enum_type = Language
    default = Language.ENGLISH


class AppSettings:
    """应用级偏好设置集合，显式创建后注入到窗口和服务中。"""

    def __init__(self, settings: Optional[QSettings] = None) -> None:
        self.settings = settings if settings is not None else QSettings(ORGANIZATION, APPLICATION)
        self.theme = ThemeSettings(self.settings)
        self.text_size = TextSizeSettings(self.settings)
        self.language = LanguageSettings(self.settings)
