from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from typing import Callable, List, NamedTuple, Sequence, Tuple

from .defaults import DEFAULT_CATEGORY_NAMES
from .models import Achievement, Category, Quote, TextSize, Theme, UserProfile


class LibrarySnapshot(NamedTuple):
    quotes: Sequence[Quote]
    categories: Sequence[Category]
    profile: UserProfile


@dataclass(frozen=True)
class AchievementRule:
    title: str
    goal: int
    metric: Callable[[LibrarySnapshot], int]


def total_quotes(snapshot: LibrarySnapshot) -> int:
    return len(snapshot.quotes)


def distinct_categories(snapshot: LibrarySnapshot) -> int:
    return len({name for quote in snapshot.quotes for name in quote.categories})


def favorites(snapshot: LibrarySnapshot) -> int:
    return sum(1 for quote in snapshot.quotes if quote.is_favorite)


def tagged_quotes(snapshot: LibrarySnapshot) -> int:
    return sum(1 for quote in snapshot.quotes if quote.tags)


def pinned_favorite(snapshot: LibrarySnapshot) -> int:
    return int(any(quote.is_pinned and quote.is_favorite for quote in snapshot.quotes))


def custom_categories(snapshot: LibrarySnapshot) -> int:
    return sum(1 for category in snapshot.categories if category.name not in DEFAULT_CATEGORY_NAMES)


def styled_profile(snapshot: LibrarySnapshot) -> int:
    profile = snapshot.profile
    return int(profile.theme is not Theme.LIGHT or profile.text_size is not TextSize.STANDARD)


def longest_daily_streak(snapshot: LibrarySnapshot) -> int:
    """连续有新增金句的自然日（本地日历）最长天数。"""
    days = sorted({quote.date_added.astimezone().date() for quote in snapshot.quotes})
    best = current = 0
    previous = None
    for day in days:
        if previous is not None and day - previous == timedelta(days=1):
            current += 1
        else:
            current = 1
        best = max(best, current)
        previous = day
    return best


RULES: Tuple[AchievementRule, ...] = (
    AchievementRule("First Steps", 1, total_quotes),
    AchievementRule("Collector", 50, total_quotes),
    AchievementRule("Century Club", 100, total_quotes),
    AchievementRule("Wisdom Keeper", 200, total_quotes),
    AchievementRule("Diversity Master", 10, distinct_categories),
    AchievementRule("Favorite Mark", 1, favorites),
    AchievementRule("Tag Master", 20, tagged_quotes),
    AchievementRule("Pinned Gem", 1, pinned_favorite),
    AchievementRule("Organizer", 5, custom_categories),
    AchievementRule("Style Setter", 1, styled_profile),
    AchievementRule("Week Warrior", 7, longest_daily_streak),
)


def evaluate(
    achievements: Sequence[Achievement],
    snapshot: LibrarySnapshot,
    timestamp: datetime,
    rules: Sequence[AchievementRule] = RULES,
) -> Tuple[List[Achievement], List[Achievement]]:
    """按规则重新计算进度。

    Returns the updated achievement list and the achievements that became
    unlocked during this pass. Already unlocked achievements are left alone,
    so ``date_unlocked`` is only ever written once.
    """
    updated = list(achievements)
    unlocked: List[Achievement] = []
    for rule in rules:
        index = next((i for i, item in enumerate(updated) if item.title == rule.title), None)
        if index is None:
            continue
        current = updated[index]
        if current.is_unlocked:
            continue

        progress = min(rule.metric(snapshot), rule.goal)
        if progress >= rule.goal:
            current = replace(current, progress=progress, is_unlocked=True, date_unlocked=timestamp)
            unlocked.append(current)
        elif progress != current.progress:
            current = replace(current, progress=progress)
        updated[index] = current
    return updated, unlocked
