from __future__ import annotations

from typing import Dict, Optional

from PySide6.QtCore import QEasingCurve, QPropertyAnimation, QSize, Qt, Signal
from PySide6.QtGui import QColor, QEnterEvent, QFont, QFontMetrics, QPainter, QPaintEvent
from PySide6.QtWidgets import (
    QGraphicsOpacityEffect,
    QHBoxLayout,
    QLabel,
    QSizePolicy,
    QVBoxLayout,
    QWidget,
)

from .appearance import FontSizes, ThemePalette, category_color, font_sizes, theme_palette
from .models import Quote, TextSize, Theme


class QuoteCard(QWidget):
    hovered = Signal(object)
    unhovered = Signal(object)

    def __init__(
        self,
        quote: Quote,
        category_colors: Optional[Dict[str, str]] = None,
        text_size: TextSize = TextSize.STANDARD,
        theme: Theme = Theme.LIGHT,
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self.quote = quote
        # 分类名 -> colorName，由调用方从 store.categories 构造
        self.category_colors = category_colors or {}
        self.fonts: FontSizes = font_sizes(text_size)
        self.palette_: ThemePalette = theme_palette(theme) or theme_palette(Theme.LIGHT)
        self._hover = False

        self.setAttribute(Qt.WidgetAttribute.WA_StyledBackground, True)
        self.setAutoFillBackground(False)
        self.setObjectName("quoteCard")
        self.setStyleSheet("#quoteCard { background: transparent; border-radius: 12px; }")
        self.setSizePolicy(QSizePolicy.Policy.Fixed, QSizePolicy.Policy.Fixed)

        self.opacity_effect = QGraphicsOpacityEffect(self)
        self.setGraphicsEffect(self.opacity_effect)

        self._opacity_animation = QPropertyAnimation(self.opacity_effect, b"opacity", self)
        self._opacity_animation.setDuration(600)
        self._opacity_animation.setEasingCurve(QEasingCurve.Type.OutCubic)

        self.layout = QVBoxLayout(self)
        self.layout.setContentsMargins(34, 26, 34, 28)
        self.layout.setSpacing(16)
        self._build_layout()
        self.set_quote(quote)

    def _build_layout(self) -> None:
        header = QHBoxLayout()
        header.setContentsMargins(0, 0, 0, 0)
        header.setSpacing(8)

        self.marker_label = QLabel("")
        self.marker_label.setFont(QFont("Source Han Sans", self.fonts.caption))
        self.marker_label.setStyleSheet(f"color: {self.palette_.accent}; background: transparent;")
        header.addWidget(self.marker_label)
        header.addStretch()

        self.content_label = QLabel("")
        self.content_label.setWordWrap(True)
        self.content_label.setAlignment(Qt.AlignmentFlag.AlignLeft | Qt.AlignmentFlag.AlignTop)
        self.content_label.setFont(QFont("Songti SC", self.fonts.body))
        self.content_label.setStyleSheet(
            f"color: {self.palette_.text}; background: transparent; line-height: 1.6;"
        )

        self.author_label = QLabel("")
        self.author_label.setFont(QFont("STKaiti", self.fonts.title, QFont.Weight.Medium))
        self.author_label.setAlignment(Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter)
        self.author_label.setStyleSheet(
            f"color: {self.palette_.secondary_text}; background: transparent;"
        )

        self.chips_row = QHBoxLayout()
        self.chips_row.setContentsMargins(0, 0, 0, 0)
        self.chips_row.setSpacing(6)

        self.layout.addLayout(header)
        self.layout.addWidget(self.content_label)
        self.layout.addStretch()
        self.layout.addWidget(self.author_label)
        self.layout.addLayout(self.chips_row)

    def set_quote(self, quote: Quote) -> None:
        self.quote = quote
        self.content_label.setText(quote.text)
        self.author_label.setText(f"— {quote.author}" if quote.author else "")

        markers = []
        if quote.is_pinned:
            markers.append("📌")
        if quote.is_favorite:
            markers.append("★")
        self.marker_label.setText(" ".join(markers))

        while self.chips_row.count():
            item = self.chips_row.takeAt(0)
            if item.widget() is not None:
                item.widget().deleteLater()
        for name in quote.categories:
            chip = QLabel(name)
            chip.setFont(QFont("Source Han Sans", self.fonts.caption))
            color = category_color(self.category_colors.get(name, ""))
            chip.setStyleSheet(
                f"color: #ffffff; background: {color}; padding: 2px 10px; border-radius: 9px;"
            )
            self.chips_row.addWidget(chip)
        self.chips_row.addStretch()
        self.updateGeometry()
        self.update()

    # region 动画控制
    def fade_in(self) -> None:
        self.opacity_effect.setOpacity(0.0)
        self._opacity_animation.stop()
        self._opacity_animation.setStartValue(0.0)
        self._opacity_animation.setEndValue(1.0)
        self._opacity_animation.start()

    # endregion

    def enterEvent(self, event: QEnterEvent) -> None:  # type: ignore[override]
        self._hover = True
        self.hovered.emit(self)
        return super().enterEvent(event)

    def leaveEvent(self, event) -> None:  # type: ignore[override]
        self._hover = False
        self.unhovered.emit(self)
        return super().leaveEvent(event)

    def paintEvent(self, event: QPaintEvent) -> None:  # type: ignore[override]
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        rect = self.rect()

        painter.setBrush(QColor(self.palette_.card))
        border = QColor(self.palette_.accent if self.quote.is_pinned else self.palette_.secondary_text)
        border.setAlpha(160)
        painter.setPen(border)
        painter.drawRoundedRect(rect.adjusted(0, 0, -1, -1), 20, 20)

        # 信纸横线
        painter.setPen(QColor(0, 0, 0, 28))
        for offset in range(60, rect.height(), 48):
            y = rect.top() + offset
            if y >= rect.bottom() - 24:
                break
            painter.drawLine(rect.left() + 26, y, rect.right() - 26, y)

        if self._hover:
            painter.setBrush(QColor(255, 255, 255, 100))
            painter.setPen(Qt.PenStyle.NoPen)
            painter.drawRoundedRect(rect, 20, 20)

        super().paintEvent(event)

    def _calculate_size(self) -> QSize:
        text = self.quote.text.strip() or " "
        margins = self.layout.contentsMargins()
        metrics = QFontMetrics(self.content_label.font())

        length = len(text)
        if length <= 60:
            target_width = 440
        elif length <= 120:
            target_width = 520
        else:
            target_width = 600

        available_width = max(160, target_width - margins.left() - margins.right())
        text_height = metrics.boundingRect(
            0,
            0,
            available_width,
            0,
            Qt.TextFlag.TextWordWrap | Qt.AlignmentFlag.AlignLeft,
            text,
        ).height()

        spacing = self.layout.spacing()
        base_height = (
            margins.top()
            + self.marker_label.sizeHint().height()
            + spacing
            + text_height
            + spacing
            + self.author_label.sizeHint().height()
            + spacing
            + 24
            + margins.bottom()
        )
        return QSize(target_width, max(220, base_height))

    def sizeHint(self) -> QSize:  # type: ignore[override]
        return self._calculate_size()

    def minimumSizeHint(self) -> QSize:  # type: ignore[override]
        return self._calculate_size()
