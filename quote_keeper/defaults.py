from __future__ import annotations

from typing import List

from .models import Achievement, Category

DEFAULT_CATEGORY_SPECS = [
    ("Life", "heart.fill", "blue"),
    ("Work", "briefcase.fill", "green"),
    ("Motivation", "star.fill", "pink"),
    ("Wisdom", "lightbulb.fill", "purple"),
    ("Growth", "chart.line.uptrend.xyaxis", "orange"),
    ("Books", "book.fill", "blue"),
    ("Humor", "face.smiling.fill", "yellow"),
    ("Dreams", "moon.stars.fill", "red"),
]

DEFAULT_CATEGORY_NAMES = frozenset(name for name, _, _ in DEFAULT_CATEGORY_SPECS)

# (title, description, icon, goal)
DEFAULT_ACHIEVEMENT_SPECS = [
    ("First Steps", "Add your first quote to the collection", "pencil", 1),
    ("Collector", "Save 50 quotes to your library", "books.vertical.fill", 50),
    ("Wisdom Keeper", "Reach 200 saved quotes", "text.quote", 200),
    ("Favorite Mark", "Mark a quote as favorite", "star.fill", 1),
    ("Random Explorer", "Use Random 10 times", "bolt.fill", 10),
    ("Organizer", "Create 5 categories", "square.grid.2x2", 5),
    ("Tag Master", "Add tags to 20 quotes", "tag.fill", 20),
    ("Nostalgia", "Browse quotes by recent additions", "clock", 1),
    ("Style Setter", "Change theme or text size", "paintbrush.fill", 1),
    ("Pinned Gem", "Pin a favorite quote", "pin.fill", 1),
    ("Week Warrior", "Add quotes for 7 days in a row", "calendar", 7),
    ("Daily Opener", "Open the app on 10 different days", "sun.max.fill", 10),
]


def default_categories() -> List[Category]:
    return [
        Category(name=name, icon_name=icon, color_name=color)
        for name, icon, color in DEFAULT_CATEGORY_SPECS
    ]


def default_achievements() -> List[Achievement]:
    """每次调用都生成新的 id，全部处于未解锁状态。"""
    return [
        Achievement(title=title, description=description, icon_name=icon, goal=goal)
        for title, description, icon, goal in DEFAULT_ACHIEVEMENT_SPECS
    ]
