from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional, Tuple


def new_id() -> str:
    return str(uuid.uuid4())


def now() -> datetime:
    """本地时区的当前时间（带偏移量）。"""
    return datetime.now().astimezone()


def _parse_datetime(value: Any) -> datetime:
    if not isinstance(value, str):
        raise TypeError(f"Expected ISO timestamp, got {type(value).__name__}")
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.astimezone()
    return parsed


def _str_tuple(value: Any) -> Tuple[str, ...]:
    if not isinstance(value, (list, tuple)):
        raise TypeError(f"Expected a list of strings, got {type(value).__name__}")
    return tuple(str(item) for item in value)


class Language(str, Enum):
    ENGLISH = "English"
    RUSSIAN = "Russian"


class Theme(str, Enum):
    LIGHT = "Light"
    DARK = "Dark"
    SYSTEM = "System"


class TextSize(str, Enum):
    SMALL = "Small"
    STANDARD = "Standard"
    LARGE = "Large"


@dataclass(frozen=True)
class Quote:
    text: str
    author: str = ""
    categories: Tuple[str, ...] = ()
    tags: Tuple[str, ...] = ()
    is_favorite: bool = False
    is_pinned: bool = False
    date_added: datetime = field(default_factory=now)
    id: str = field(default_factory=new_id)

    def __post_init__(self) -> None:
        # 允许调用方直接传 list
        object.__setattr__(self, "categories", tuple(self.categories))
        object.__setattr__(self, "tags", tuple(self.tags))
        # 无时区的时间按本地时区解释
        if self.date_added.tzinfo is None:
            object.__setattr__(self, "date_added", self.date_added.astimezone())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "text": self.text,
            "author": self.author,
            "categories": list(self.categories),
            "tags": list(self.tags),
            "isFavorite": self.is_favorite,
            "isPinned": self.is_pinned,
            "dateAdded": self.date_added.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Quote":
        text = data["text"]
        if not isinstance(text, str):
            raise TypeError("Quote text must be a string")
        return cls(
            id=str(data["id"]),
            text=text,
            author=str(data.get("author", "")),
            categories=_str_tuple(data.get("categories", [])),
            tags=_str_tuple(data.get("tags", [])),
            is_favorite=bool(data.get("isFavorite", False)),
            is_pinned=bool(data.get("isPinned", False)),
            date_added=_parse_datetime(data["dateAdded"]),
        )


@dataclass(frozen=True)
class Category:
    name: str
    icon_name: str = "book.fill"
    color_name: str = "blue"
    id: str = field(default_factory=new_id)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "iconName": self.icon_name,
            "colorName": self.color_name,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Category":
        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            icon_name=str(data.get("iconName", "book.fill")),
            color_name=str(data.get("colorName", "blue")),
        )


@dataclass(frozen=True)
class Achievement:
    title: str
    description: str
    icon_name: str
    goal: int
    progress: int = 0
    is_unlocked: bool = False
    date_unlocked: Optional[datetime] = None
    id: str = field(default_factory=new_id)

    def __post_init__(self) -> None:
        if self.goal <= 0:
            raise ValueError(f"Achievement goal must be positive: {self.title!r}")
        if self.progress < 0:
            raise ValueError(f"Achievement progress must not be negative: {self.title!r}")

    @property
    def fraction(self) -> float:
        return min(1.0, self.progress / self.goal)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "iconName": self.icon_name,
            "isUnlocked": self.is_unlocked,
            "dateUnlocked": self.date_unlocked.isoformat() if self.date_unlocked else None,
            "progress": self.progress,
            "goal": self.goal,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Achievement":
        unlocked_at = data.get("dateUnlocked")
        return cls(
            id=str(data["id"]),
            title=str(data["title"]),
            description=str(data.get("description", "")),
            icon_name=str(data.get("iconName", "")),
            goal=int(data["goal"]),
            progress=int(data.get("progress", 0)),
            is_unlocked=bool(data.get("isUnlocked", False)),
            date_unlocked=_parse_datetime(unlocked_at) if unlocked_at else None,
        )


@dataclass(frozen=True)
class UserProfile:
    name: str = ""
    email: str = ""
    avatar_icon_name: str = "person.fill"
    language: Language = Language.ENGLISH
    theme: Theme = Theme.LIGHT
    text_size: TextSize = TextSize.STANDARD

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "email": self.email,
            "avatarIconName": self.avatar_icon_name,
            "language": self.language.value,
            "theme": self.theme.value,
            "textSize": self.text_size.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UserProfile":
        return cls(
            name=str(data.get("name", "")),
            email=str(data.get("email", "")),
            avatar_icon_name=str(data.get("avatarIconName", "person.fill")),
            language=Language(data.get("language", Language.ENGLISH.value)),
            theme=Theme(data.get("theme", Theme.LIGHT.value)),
            text_size=TextSize(data.get("textSize", TextSize.STANDARD.value)),
        )
