from __future__ import annotations

import random
from dataclasses import replace
from datetime import datetime
from typing import Callable, List, Optional, Tuple

from PySide6.QtCore import QObject, QTimer, Signal

from . import codec
from .achievements import LibrarySnapshot, evaluate
from .defaults import default_achievements, default_categories
from .logger import get_logger
from .models import Achievement, Category, Quote, UserProfile, now
from .storage import KeyValueStorage, PersistenceError

logger = get_logger("store")

QUOTES_KEY = "quotes"
CATEGORIES_KEY = "categories"
ACHIEVEMENTS_KEY = "achievements"
PROFILE_KEY = "userProfile"


class LibraryStore(QObject):
    """金句库：内存中的全部状态，每次修改后整体写回存储。

    Mutating methods return ``True`` when the new state was written to storage
    and ``False`` when nothing changed or the write failed; a failed write
    additionally emits ``persistence_failed`` while the in-memory state keeps
    the change. Achievements are re-evaluated only after a successful write.
    """

    quotes_changed = Signal(object)
    categories_changed = Signal(object)
    achievements_changed = Signal(object)
    profile_changed = Signal(object)
    achievement_unlocked = Signal(object)
    persistence_failed = Signal(str)
    loaded = Signal()

    def __init__(
        self,
        storage: KeyValueStorage,
        parent: Optional[QObject] = None,
        defer_load: bool = True,
        clock: Callable[[], datetime] = now,
        rng: Optional[random.Random] = None,
    ) -> None:
        super().__init__(parent)
        self.storage = storage
        self.clock = clock
        self.rng = rng or random.Random()
        self._quotes: List[Quote] = []
        self._categories: List[Category] = []
        self._achievements: List[Achievement] = []
        self._profile = UserProfile()
        self._loaded = False

        if defer_load:
            QTimer.singleShot(0, self.load)
        else:
            self.load()

    # region 状态访问
    @property
    def is_loaded(self) -> bool:
        return self._loaded

    @property
    def quotes(self) -> Tuple[Quote, ...]:
        return tuple(self._quotes)

    @property
    def categories(self) -> Tuple[Category, ...]:
        return tuple(self._categories)

    @property
    def achievements(self) -> Tuple[Achievement, ...]:
        return tuple(self._achievements)

    @property
    def user_profile(self) -> UserProfile:
        return self._profile

    # endregion

    # region 加载与持久化
    def load(self) -> None:
        if self._loaded:
            return
        self._quotes = self._read(QUOTES_KEY, codec.decode_quotes, list)
        self._categories = self._read(CATEGORIES_KEY, codec.decode_categories, list)
        self._achievements = self._read(ACHIEVEMENTS_KEY, codec.decode_achievements, list)
        self._profile = self._read(PROFILE_KEY, codec.decode_profile, UserProfile)
        self._loaded = True
        logger.info(
            "Loaded %d quotes, %d categories, %d achievements",
            len(self._quotes),
            len(self._categories),
            len(self._achievements),
        )

        if not self._categories:
            logger.info("Seeding default categories")
            self._categories = default_categories()
        if not self._achievements:
            logger.info("Seeding default achievements")
            self._achievements = default_achievements()
        self._save()

        self._emit_all()
        self.loaded.emit()

    def _read(self, key: str, decode, fallback):
        raw = self.storage.get(key)
        if raw is None:
            return fallback()
        try:
            return decode(raw)
        except codec.CodecError as exc:
            logger.warning("Discarding unreadable %r slice: %s", key, exc)
            return fallback()

    def _ensure_loaded(self) -> None:
        if not self._loaded:
            self.load()

    def _save(self) -> bool:
        try:
            self.storage.set(QUOTES_KEY, codec.encode_quotes(self._quotes))
            self.storage.set(CATEGORIES_KEY, codec.encode_categories(self._categories))
            self.storage.set(ACHIEVEMENTS_KEY, codec.encode_achievements(self._achievements))
            self.storage.set(PROFILE_KEY, codec.encode_profile(self._profile))
        except PersistenceError as exc:
            logger.error("Failed to persist library: %s", exc)
            self.persistence_failed.emit(str(exc))
            return False
        return True

    def _emit_all(self) -> None:
        self.quotes_changed.emit(self.quotes)
        self.categories_changed.emit(self.categories)
        self.achievements_changed.emit(self.achievements)
        self.profile_changed.emit(self._profile)

    # endregion

    # region 金句
    def _quote_index(self, quote_id: str) -> Optional[int]:
        return next((i for i, item in enumerate(self._quotes) if item.id == quote_id), None)

    def get_quote(self, quote_id: str) -> Optional[Quote]:
        index = self._quote_index(quote_id)
        return self._quotes[index] if index is not None else None

    def _clear_pins(self) -> None:
        self._quotes = [
            replace(item, is_pinned=False) if item.is_pinned else item for item in self._quotes
        ]

    def add_quote(self, quote: Quote) -> bool:
        self._ensure_loaded()
        if quote.is_pinned:
            self._clear_pins()
        self._quotes.append(quote)
        logger.debug("Added quote %s", quote.id)
        saved = self._save()
        self.quotes_changed.emit(self.quotes)
        return saved and self.check_achievements()

    def update_quote(self, quote: Quote) -> bool:
        """替换同 id 的金句，位置与添加时间保持不变。"""
        self._ensure_loaded()
        index = self._quote_index(quote.id)
        if index is None:
            return False
        stored = self._quotes[index]
        if quote.is_pinned and not stored.is_pinned:
            self._clear_pins()
        self._quotes[index] = replace(quote, date_added=stored.date_added)
        saved = self._save()
        self.quotes_changed.emit(self.quotes)
        return saved and self.check_achievements()

    def delete_quote(self, quote: Quote) -> bool:
        self._ensure_loaded()
        remaining = [item for item in self._quotes if item.id != quote.id]
        if len(remaining) == len(self._quotes):
            return False
        self._quotes = remaining
        logger.debug("Deleted quote %s", quote.id)
        saved = self._save()
        self.quotes_changed.emit(self.quotes)
        return saved

    def toggle_favorite(self, quote: Quote) -> bool:
        self._ensure_loaded()
        index = self._quote_index(quote.id)
        if index is None:
            return False
        current = self._quotes[index]
        self._quotes[index] = replace(current, is_favorite=not current.is_favorite)
        saved = self._save()
        self.quotes_changed.emit(self.quotes)
        return saved and self.check_achievements()

    def toggle_pin(self, quote: Quote) -> bool:
        """置顶/取消置顶。置顶新金句时先取消其他金句的置顶，再统一保存。"""
        self._ensure_loaded()
        index = self._quote_index(quote.id)
        if index is None:
            return False
        target = self._quotes[index]
        if not target.is_pinned:
            self._clear_pins()
        self._quotes[index] = replace(target, is_pinned=not target.is_pinned)
        saved = self._save()
        self.quotes_changed.emit(self.quotes)
        return saved and self.check_achievements()

    # endregion

    # region 分类
    def _category_index(self, category_id: str) -> Optional[int]:
        return next((i for i, item in enumerate(self._categories) if item.id == category_id), None)

    def add_category(self, category: Category) -> bool:
        self._ensure_loaded()
        self._categories.append(category)
        saved = self._save()
        self.categories_changed.emit(self.categories)
        return saved and self.check_achievements()

    def update_category(self, category: Category) -> bool:
        self._ensure_loaded()
        index = self._category_index(category.id)
        if index is None:
            return False
        self._categories[index] = category
        saved = self._save()
        self.categories_changed.emit(self.categories)
        return saved

    def delete_category(self, category: Category) -> bool:
        """删除分类，并从所有金句的分类列表中移除该名称（金句本身保留）。"""
        self._ensure_loaded()
        quotes_touched = False
        cleaned: List[Quote] = []
        for item in self._quotes:
            if category.name in item.categories:
                item = replace(item, categories=tuple(c for c in item.categories if c != category.name))
                quotes_touched = True
            cleaned.append(item)
        self._quotes = cleaned
        self._categories = [item for item in self._categories if item.id != category.id]
        saved = self._save()
        if quotes_touched:
            self.quotes_changed.emit(self.quotes)
        self.categories_changed.emit(self.categories)
        return saved

    # endregion

    # region 用户资料
    def update_user_profile(self, profile: UserProfile) -> bool:
        self._ensure_loaded()
        self._profile = profile
        saved = self._save()
        self.profile_changed.emit(self._profile)
        return saved and self.check_achievements()

    def reset_all_data(self) -> bool:
        """清空金句、重置成就与用户资料。分类保持不变。"""
        self._ensure_loaded()
        self._quotes = []
        self._achievements = default_achievements()
        self._profile = UserProfile()
        logger.info("Library reset")
        saved = self._save()
        self.quotes_changed.emit(self.quotes)
        self.achievements_changed.emit(self.achievements)
        self.profile_changed.emit(self._profile)
        return saved

    # endregion

    # region 成就
    def check_achievements(self) -> bool:
        """重新计算成就进度；只有发生变化时才保存。"""
        snapshot = LibrarySnapshot(tuple(self._quotes), tuple(self._categories), self._profile)
        updated, unlocked = evaluate(self._achievements, snapshot, self.clock())
        if updated == self._achievements:
            return True
        self._achievements = updated
        self.achievements_changed.emit(self.achievements)
        for achievement in unlocked:
            logger.info("Achievement unlocked: %s", achievement.title)
            self.achievement_unlocked.emit(achievement)
        return self._save()

    @property
    def unlocked_achievements(self) -> List[Achievement]:
        return [item for item in self._achievements if item.is_unlocked]

    # endregion

    # region 派生视图
    @property
    def pinned_quote(self) -> Optional[Quote]:
        return next((item for item in self._quotes if item.is_pinned), None)

    @property
    def favorite_quotes(self) -> List[Quote]:
        favorites = [item for item in self._quotes if item.is_favorite]
        return sorted(favorites, key=lambda item: item.date_added, reverse=True)

    def quotes_by_category(self, name: str) -> List[Quote]:
        return [item for item in self._quotes if name in item.categories]

    def quotes_by_tag(self, tag: str) -> List[Quote]:
        return [item for item in self._quotes if tag in item.tags]

    def random_quote(self) -> Optional[Quote]:
        if not self._quotes:
            return None
        return self.rng.choice(self._quotes)

    def search_quotes(
        self,
        text: str = "",
        category: Optional[str] = None,
        tag: Optional[str] = None,
        author: Optional[str] = None,
    ) -> List[Quote]:
        results = list(self._quotes)
        needle = text.casefold()
        if needle:
            results = [
                item
                for item in results
                if needle in item.text.casefold()
                or needle in item.author.casefold()
                or any(needle in t.casefold() for t in item.tags)
            ]
        if category is not None:
            results = [item for item in results if category in item.categories]
        if tag is not None:
            results = [item for item in results if tag in item.tags]
        if author is not None:
            results = [item for item in results if item.author == author]
        return results

    def all_tags(self) -> List[str]:
        return sorted({t for item in self._quotes for t in item.tags})

    def all_authors(self) -> List[str]:
        return sorted({item.author for item in self._quotes if item.author})

    def category_usage(self) -> List[Tuple[Category, int, float]]:
        total = len(self._quotes)
        usage = []
        for category in self._categories:
            count = len(self.quotes_by_category(category.name))
            if count:
                usage.append((category, count, count / total * 100))
        usage.sort(key=lambda entry: entry[1], reverse=True)
        return usage

    @property
    def total_quotes_count(self) -> int:
        return len(self._quotes)

    @property
    def favorites_count(self) -> int:
        return sum(1 for item in self._quotes if item.is_favorite)

    @property
    def categories_count(self) -> int:
        return len(self._categories)

    @property
    def this_month_quotes_count(self) -> int:
        current = self.clock().astimezone()
        # 按本地日历的月初计算（月初可能与当前处于不同的夏令时偏移）
        start_of_month = datetime(current.year, current.month, 1).astimezone()
        return sum(1 for item in self._quotes if item.date_added >= start_of_month)

    # endregion
