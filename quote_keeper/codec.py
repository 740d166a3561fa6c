from __future__ import annotations

import json
from typing import Any, Callable, Iterable, List, TypeVar

from .models import Achievement, Category, Quote, UserProfile

FORMAT_VERSION = 1

T = TypeVar("T")


class CodecError(ValueError):
    """存储内容无法解码。"""


def _wrap(payload: Any) -> bytes:
    document = {"version": FORMAT_VERSION, "data": payload}
    return json.dumps(document, ensure_ascii=False).encode("utf-8")


def _unwrap(raw: bytes) -> Any:
    try:
        document = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise CodecError(f"Invalid JSON document: {exc}") from exc

    # 兼容未带版本信封的旧数据
    if isinstance(document, dict) and "version" in document and "data" in document:
        version = document["version"]
        if not isinstance(version, int) or version > FORMAT_VERSION:
            raise CodecError(f"Unsupported format version: {version!r}")
        return document["data"]
    return document


def _decode_list(raw: bytes, factory: Callable[[Any], T]) -> List[T]:
    payload = _unwrap(raw)
    if not isinstance(payload, list):
        raise CodecError(f"Expected a list, got {type(payload).__name__}")
    try:
        return [factory(item) for item in payload]
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        raise CodecError(f"Malformed record: {exc!r}") from exc


def encode_quotes(quotes: Iterable[Quote]) -> bytes:
    return _wrap([quote.to_dict() for quote in quotes])


def decode_quotes(raw: bytes) -> List[Quote]:
    return _decode_list(raw, Quote.from_dict)


def encode_categories(categories: Iterable[Category]) -> bytes:
    return _wrap([category.to_dict() for category in categories])


def decode_categories(raw: bytes) -> List[Category]:
    return _decode_list(raw, Category.from_dict)


def encode_achievements(achievements: Iterable[Achievement]) -> bytes:
    return _wrap([achievement.to_dict() for achievement in achievements])


def decode_achievements(raw: bytes) -> List[Achievement]:
    return _decode_list(raw, Achievement.from_dict)


def encode_profile(profile: UserProfile) -> bytes:
    return _wrap(profile.to_dict())


def decode_profile(raw: bytes) -> UserProfile:
    payload = _unwrap(raw)
    if not isinstance(payload, dict):
        raise CodecError(f"Expected an object, got {type(payload).__name__}")
    try:
        return UserProfile.from_dict(payload)
    except (KeyError, TypeError, ValueError) as exc:
        raise CodecError(f"Malformed profile: {exc!r}") from exc


__all__ = [
    "CodecError",
    "FORMAT_VERSION",
    "encode_quotes",
    "decode_quotes",
    "encode_categories",
    "decode_categories",
    "encode_achievements",
    "decode_achievements",
    "encode_profile",
    "decode_profile",
]
