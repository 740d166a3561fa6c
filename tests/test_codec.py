import json
from datetime import datetime, timedelta, timezone

import pytest

from quote_keeper import codec
from quote_keeper.defaults import default_achievements, default_categories
from quote_keeper.models import Achievement, Category, Language, Quote, TextSize, Theme, UserProfile


def test_quotes_round_trip():
    quotes = [
        Quote(
            text="Be yourself; everyone else is already taken.",
            author="Oscar Wilde",
            categories=["Life", "Wisdom"],
            tags=["identity"],
            is_favorite=True,
            is_pinned=True,
            date_added=datetime(2026, 3, 1, 8, 30, 15, 123456, tzinfo=timezone(timedelta(hours=3))),
        ),
        Quote(text="Цитата без автора"),
    ]
    assert codec.decode_quotes(codec.encode_quotes(quotes)) == quotes


def test_categories_round_trip():
    categories = default_categories() + [Category(name="Odd", color_name="teal")]
    decoded = codec.decode_categories(codec.encode_categories(categories))
    assert decoded == categories
    # unknown colors are stored verbatim; the fallback happens at lookup time
    assert decoded[-1].color_name == "teal"


def test_achievements_round_trip():
    achievements = default_achievements()
    achievements[0] = Achievement(
        title="First Steps",
        description="Add your first quote",
        icon_name="pencil",
        goal=1,
        progress=1,
        is_unlocked=True,
        date_unlocked=datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc),
        id=achievements[0].id,
    )
    assert codec.decode_achievements(codec.encode_achievements(achievements)) == achievements


def test_profile_round_trip():
    profile = UserProfile(
        name="Роман",
        email="r@example.com",
        avatar_icon_name="star",
        language=Language.RUSSIAN,
        theme=Theme.SYSTEM,
        text_size=TextSize.SMALL,
    )
    assert codec.decode_profile(codec.encode_profile(profile)) == profile


def test_envelope_layout():
    document = json.loads(codec.encode_profile(UserProfile()).decode("utf-8"))
    assert document["version"] == codec.FORMAT_VERSION
    assert document["data"]["theme"] == "Light"
    assert document["data"]["textSize"] == "Standard"


def test_unversioned_payload_is_accepted():
    quote = Quote(text="legacy", date_added=datetime(2025, 1, 1, tzinfo=timezone.utc))
    raw = json.dumps([quote.to_dict()]).encode("utf-8")
    assert codec.decode_quotes(raw) == [quote]


@pytest.mark.parametrize(
    "raw",
    [
        b"",
        b"not json",
        b"\x00\xff",
        b'{"version": 99, "data": []}',
        b'{"version": 1, "data": {}}',
        b'[{"text": "no id or date"}]',
        b'[{"id": "1", "text": 5, "dateAdded": "2026-01-01T00:00:00+00:00"}]',
        b'[{"id": "1", "text": "x", "dateAdded": "yesterday"}]',
    ],
)
def test_malformed_quotes_raise_codec_error(raw):
    with pytest.raises(codec.CodecError):
        codec.decode_quotes(raw)


def test_malformed_profile_raises_codec_error():
    with pytest.raises(codec.CodecError):
        codec.decode_profile(b'{"version": 1, "data": {"language": "Klingon"}}')
    with pytest.raises(codec.CodecError):
        codec.decode_profile(b'{"version": 1, "data": []}')


def test_achievement_goal_must_be_positive():
    with pytest.raises(codec.CodecError):
        codec.decode_achievements(b'[{"id": "a", "title": "Broken", "goal": 0}]')


def test_quote_defaults():
    quote = Quote(text="x", categories=["a"], tags=["b"])
    assert quote.author == ""
    assert quote.categories == ("a",)
    assert quote.tags == ("b",)
    assert not quote.is_favorite and not quote.is_pinned
    assert quote.date_added.tzinfo is not None
    assert Quote(text="x").id != Quote(text="x").id


def test_naive_date_added_is_local_and_round_trips():
    quote = Quote(text="x", date_added=datetime(2026, 10, 1, 9, 0))
    assert quote.date_added.tzinfo is not None
    assert quote.date_added == datetime(2026, 10, 1, 9, 0).astimezone()
    assert codec.decode_quotes(codec.encode_quotes([quote])) == [quote]
