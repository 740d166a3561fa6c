from __future__ import annotations

import os
import sys
from typing import Optional

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QApplication, QHBoxLayout, QLabel, QMainWindow, QVBoxLayout, QWidget

from .appearance import theme_palette
from .card_widget import QuoteCard
from .localization import Localizer
from .logger import get_logger, setup_logging
from .models import Achievement, Quote
from .settings import AppSettings
from .storage import QSettingsStorage
from .store import LibraryStore

logger = get_logger("main")


class MainWindow(QMainWindow):
    def __init__(self, store: LibraryStore, settings: AppSettings, localizer: Localizer) -> None:
        super().__init__()
        self.store = store
        self.settings = settings
        self.localizer = localizer
        self.current_quote: Optional[Quote] = None
        self.card: Optional[QuoteCard] = None

        central = QWidget(self)
        self.root_layout = QVBoxLayout(central)
        self.root_layout.setContentsMargins(32, 24, 32, 24)
        self.root_layout.setSpacing(18)

        self.stats_row = QHBoxLayout()
        self.stats_labels = {key: QLabel("") for key in ("quotes", "favorites", "categories", "this_month")}
        for label in self.stats_labels.values():
            label.setAlignment(Qt.AlignmentFlag.AlignCenter)
            self.stats_row.addWidget(label)
        self.root_layout.addLayout(self.stats_row)

        self.card_area = QVBoxLayout()
        self.card_area.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.empty_label = QLabel("")
        self.empty_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.card_area.addWidget(self.empty_label)
        self.root_layout.addLayout(self.card_area, 1)

        self.status_label = QLabel("")
        self.status_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.root_layout.addWidget(self.status_label)
        self.setCentralWidget(central)

        store.quotes_changed.connect(self._on_quotes_changed)
        store.categories_changed.connect(lambda _categories: self._refresh_card())
        store.achievement_unlocked.connect(self._on_achievement_unlocked)
        store.persistence_failed.connect(self._on_persistence_failed)
        settings.theme.changed.connect(lambda _theme: self._apply_theme())
        settings.text_size.changed.connect(lambda _size: self._refresh_card())
        localizer.language_changed.connect(lambda _language: self.retranslate())

        self._apply_theme()
        self.retranslate()

    def retranslate(self) -> None:
        self.setWindowTitle(self.localizer.localized("app.title"))
        self.empty_label.setText(self.localizer.localized("library.empty"))
        self._refresh_stats()

    def _apply_theme(self) -> None:
        palette = theme_palette(self.settings.theme.value)
        if palette is None:
            self.setStyleSheet("")
        else:
            self.setStyleSheet(f"background-color: {palette.window}; color: {palette.text};")
        self._refresh_card()

    # region 数据刷新
    def _on_quotes_changed(self, quotes) -> None:
        if self.current_quote is not None:
            self.current_quote = self.store.get_quote(self.current_quote.id)
        if self.current_quote is None:
            self.current_quote = self.store.pinned_quote or self.store.random_quote()
        self._refresh_stats()
        self._refresh_card()

    def _refresh_stats(self) -> None:
        values = {
            "quotes": self.store.total_quotes_count,
            "favorites": self.store.favorites_count,
            "categories": self.store.categories_count,
            "this_month": self.store.this_month_quotes_count,
        }
        for key, label in self.stats_labels.items():
            label.setText(f"{values[key]}\n{self.localizer.localized('stats.' + key)}")

    def _refresh_card(self) -> None:
        if self.card is not None:
            self.card_area.removeWidget(self.card)
            self.card.deleteLater()
            self.card = None
        quote = self.current_quote
        self.empty_label.setVisible(quote is None)
        if quote is None:
            return
        colors = {category.name: category.color_name for category in self.store.categories}
        self.card = QuoteCard(
            quote,
            category_colors=colors,
            text_size=self.settings.text_size.value,
            theme=self.settings.theme.value,
        )
        self.card_area.addWidget(self.card, 0, Qt.AlignmentFlag.AlignCenter)
        self.card.fade_in()

    def _on_achievement_unlocked(self, achievement: Achievement) -> None:
        self.status_label.setText(
            self.localizer.localized("achievement.unlocked", title=achievement.title)
        )

    def _on_persistence_failed(self, message: str) -> None:
        self.status_label.setText(self.localizer.localized("error.save_failed", message=message))

    # endregion

    # region 交互
    def show_random_quote(self) -> None:
        self.current_quote = self.store.random_quote()
        self._refresh_card()

    def favorite_current(self) -> None:
        if self.current_quote is not None:
            self.store.toggle_favorite(self.current_quote)

    def pin_current(self) -> None:
        if self.current_quote is not None:
            self.store.toggle_pin(self.current_quote)

    def keyPressEvent(self, event) -> None:  # type: ignore[override]
        if event.isAutoRepeat():
            return
        key = event.key()
        if key == Qt.Key.Key_Escape:
            self.close()
        elif key == Qt.Key.Key_F:
            self.favorite_current()
        elif key == Qt.Key.Key_P:
            self.pin_current()
        elif key == Qt.Key.Key_R:
            self.show_random_quote()
        else:
            super().keyPressEvent(event)

    # endregion


def main() -> int:
    setup_logging(level=os.environ.get("QUOTE_KEEPER_LOG_LEVEL", "WARNING"))
    app = QApplication(sys.argv)
    app.setApplicationName("QuoteKeeper")
    app.setOrganizationName("QuoteKeeper")

    settings = AppSettings()
    localizer = Localizer(settings.language)
    store = LibraryStore(QSettingsStorage())

    window = MainWindow(store, settings, localizer)
    window.resize(960, 640)
    window.show()
    logger.info("QuoteKeeper started")
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
