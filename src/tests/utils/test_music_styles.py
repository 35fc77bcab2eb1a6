"""Unit tests for the rule-based music style classifier."""

import polars as pl
import pytest

from src.utils.music_styles import (
    DEFAULT_STYLE,
    MUSIC_STYLES,
    STYLE_FEATURES,
    classify_track,
    music_style_expr,
    with_music_style,
)

NEUTRAL_FEATURES = {
    "danceability": 0.5,
    "energy": 0.5,
    "acousticness": 0.2,
    "speechiness": 0.05,
    "instrumentalness": 0.0,
    "valence": 0.5,
}


def features(**overrides: float) -> dict[str, float]:
    """Return neutral audio features with the given overrides."""
    return {**NEUTRAL_FEATURES, **overrides}


@pytest.mark.parametrize(
    ("overrides", "expected"),
    [
        ({"danceability": 0.8, "energy": 0.8}, "High Energy Dance"),
        ({"danceability": 0.8, "energy": 0.7}, "Moderate Dance"),
        ({"acousticness": 0.8}, "Acoustic"),
        ({"speechiness": 0.4}, "Spoken Word/Rap"),
        ({"instrumentalness": 0.6}, "Instrumental"),
        ({"valence": 0.8, "energy": 0.65}, "Happy/Upbeat"),
        ({"valence": 0.2}, "Sad/Melancholic"),
        ({"energy": 0.85}, "High Energy Rock/Pop"),
        ({"energy": 0.2, "acousticness": 0.6}, "Ambient/Chill"),
        ({}, DEFAULT_STYLE),
    ],
)
def test_classify_track_labels(overrides: dict[str, float], expected: str) -> None:
    """Test every style label is reachable from its defining features."""
    assert classify_track(features(**overrides)) == expected


def test_classify_track_first_matching_rule_wins() -> None:
    """Test priority order: dance rules beat the happy/upbeat rule."""
    track = features(danceability=0.8, energy=0.8, valence=0.9)
    assert classify_track(track) == "High Energy Dance"


def test_classify_track_thresholds_are_strict() -> None:
    """Test values equal to a threshold do not satisfy a strict comparison."""
    assert classify_track(features(danceability=0.7, energy=0.9)) == "High Energy Rock/Pop"
    assert classify_track(features(acousticness=0.7)) == DEFAULT_STYLE
    assert classify_track(features(valence=0.3)) == DEFAULT_STYLE


def test_classify_track_ambient_shadowed_by_acoustic() -> None:
    """Test a quiet, strongly acoustic track is labelled Acoustic before Ambient/Chill."""
    assert classify_track(features(energy=0.2, acousticness=0.9)) == "Acoustic"


def test_classify_track_is_deterministic() -> None:
    """Test the same features always yield the same label."""
    track = features(valence=0.75, energy=0.61)
    assert {classify_track(track) for _ in range(5)} == {"Happy/Upbeat"}


def test_classify_track_missing_feature() -> None:
    """Test a missing feature raises a KeyError naming it."""
    track = features()
    del track["speechiness"]

    with pytest.raises(KeyError, match="speechiness"):
        classify_track(track)


def test_music_styles_catalogue() -> None:
    """Test the catalogue holds ten distinct labels, the fallback last."""
    assert len(MUSIC_STYLES) == 10
    assert len(set(MUSIC_STYLES)) == 10
    assert MUSIC_STYLES[-1] == DEFAULT_STYLE
    assert set(STYLE_FEATURES) == set(NEUTRAL_FEATURES)


def test_music_style_expr_agrees_with_classify_track() -> None:
    """Test the vectorised rules label every row like the scalar classifier."""
    rows = [
        features(danceability=0.8, energy=0.8),
        features(danceability=0.8, energy=0.7),
        features(acousticness=0.8),
        features(speechiness=0.4),
        features(instrumentalness=0.6),
        features(valence=0.8, energy=0.65),
        features(valence=0.2),
        features(energy=0.85),
        features(energy=0.2, acousticness=0.6),
        features(),
    ]
    df = pl.DataFrame(rows)

    labels = df.select(music_style_expr()).get_column("music_style").to_list()

    assert labels == [classify_track(row) for row in rows]
    assert labels == list(MUSIC_STYLES)


def test_music_style_on_two_tracks() -> None:
    """Test a high and a low energy track get their labels from both classifiers."""
    rows = [features(danceability=0.9, energy=0.9), features(danceability=0.2, energy=0.2)]
    expected = ["High Energy Dance", "Balanced Pop/Rock"]

    assert [classify_track(row) for row in rows] == expected
    assert pl.DataFrame(rows).select(music_style_expr())["music_style"].to_list() == expected


def test_with_music_style_on_sample_tracks(normalized_tracks: pl.DataFrame) -> None:
    """Test the silver-shaped sample tracks are labelled one style each."""
    result = with_music_style(normalized_tracks)

    assert result.columns[-1] == "music_style"
    assert result.height == normalized_tracks.height
    assert dict(zip(result["track"], result["music_style"], strict=True)) == {
        "Blinding Lights": "Balanced Pop/Rock",
        "Shape of You": "Moderate Dance",
        "Perfect": "Sad/Melancholic",
        "Wheels on the Bus": "High Energy Dance",
        "Rain on Tent": "Acoustic",
        "Despacito": "Happy/Upbeat",
    }
