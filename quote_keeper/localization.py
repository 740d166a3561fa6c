from __future__ import annotations

from typing import Dict, Optional

from PySide6.QtCore import QObject, Signal

from .models import Language
from .settings import LanguageSettings

STRINGS: Dict[Language, Dict[str, str]] = {
    Language.ENGLISH: {
        "app.title": "QuoteKeeper",
        "library.empty": "Your library is empty. Add your first quote!",
        "library.pinned": "Pinned",
        "library.random": "Random quote",
        "stats.quotes": "Quotes",
        "stats.favorites": "Favorites",
        "stats.categories": "Categories",
        "stats.this_month": "This month",
        "stats.achievements": "{unlocked} / {total} achievements",
        "quote.unknown_author": "Unknown",
        "achievement.unlocked": "Achievement unlocked: {title}",
        "error.save_failed": "Could not save your library: {message}",
    },
    Language.RUSSIAN: {
        "app.title": "QuoteKeeper",
        "library.empty": "Ваша библиотека пуста. Добавьте первую цитату!",
        "library.pinned": "Закреплено",
        "library.random": "Случайная цитата",
        "stats.quotes": "Цитаты",
        "stats.favorites": "Избранное",
        "stats.categories": "Категории",
        "stats.this_month": "В этом месяце",
        "stats.achievements": "Достижения: {unlocked} / {total}",
        "quote.unknown_author": "Неизвестный автор",
        "achievement.unlocked": "Достижение получено: {title}",
        "error.save_failed": "Не удалось сохранить библиотеку: {message}",
    },
}


class Localizer(QObject):
    """字符串查找服务：当前语言 -> 英文 -> key 本身。"""

    language_changed = Signal(object)

    def __init__(
        self,
        language_settings: LanguageSettings,
        strings: Optional[Dict[Language, Dict[str, str]]] = None,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self.language_settings = language_settings
        self.strings = strings if strings is not None else STRINGS
        language_settings.changed.connect(self.language_changed)

    @property
    def language(self) -> Language:
        return self.language_settings.value

    def localized(self, key: str, **kwargs) -> str:
        table = self.strings.get(self.language, {})
        template = table.get(key)
        if template is None:
            template = self.strings.get(Language.ENGLISH, {}).get(key, key)
        return template.format(**kwargs) if kwargs else template
