"""Rule-based music style classification from Spotify audio features."""

import operator
from collections.abc import Callable, Mapping
from functools import reduce
from typing import NamedTuple

import polars as pl

Condition = tuple[str, Callable[[float, float], bool], float]


class StyleRule(NamedTuple):
    """A label assigned when every condition holds for a track's features."""

    label: str
    conditions: tuple[Condition, ...]

    def matches(self, features: Mapping[str, float]) -> bool:
        """Return True if the track's features satisfy every condition of the rule."""
        return all(compare(features[feature], threshold) for feature, compare, threshold in self.conditions)

    def to_expr(self) -> pl.Expr:
        """Return the rule as a boolean polars expression."""
        return reduce(
            operator.and_,
            (compare(pl.col(feature), threshold) for feature, compare, threshold in self.conditions),
        )


# Evaluated top to bottom, the first matching rule wins.
STYLE_RULES: tuple[StyleRule, ...] = (
    StyleRule("High Energy Dance", (("danceability", operator.gt, 0.7), ("energy", operator.gt, 0.7))),
    StyleRule("Moderate Dance", (("danceability", operator.gt, 0.7), ("energy", operator.le, 0.7))),
    StyleRule("Acoustic", (("acousticness", operator.gt, 0.7),)),
    StyleRule("Spoken Word/Rap", (("speechiness", operator.gt, 0.33),)),
    StyleRule("Instrumental", (("instrumentalness", operator.gt, 0.5),)),
    StyleRule("Happy/Upbeat", (("valence", operator.gt, 0.7), ("energy", operator.gt, 0.6))),
    StyleRule("Sad/Melancholic", (("valence", operator.lt, 0.3),)),
    StyleRule("High Energy Rock/Pop", (("energy", operator.gt, 0.8),)),
    StyleRule("Ambient/Chill", (("energy", operator.lt, 0.3), ("acousticness", operator.gt, 0.5))),
)
DEFAULT_STYLE = "Balanced Pop/Rock"

MUSIC_STYLES: tuple[str, ...] = (*(rule.label for rule in STYLE_RULES), DEFAULT_STYLE)

STYLE_FEATURES: tuple[str, ...] = tuple(
    dict.fromkeys(feature for rule in STYLE_RULES for feature, _, _ in rule.conditions)
)


def classify_track(features: Mapping[str, float]) -> str:
    """
    Assign a music style to a single track.

    Parameters
    ----------
    features : Mapping[str, float]
        Audio features of the track. Must contain every feature listed in ``STYLE_FEATURES``.

    Returns
    -------
    str
        One of ``MUSIC_STYLES``.

    Raises
    ------
    KeyError
        If a feature used by the rules is missing.

    Examples
    --------
    >>> classify_track({"danceability": 0.8, "energy": 0.8, "valence": 0.9, "acousticness": 0.1,
    ...                 "speechiness": 0.05, "instrumentalness": 0.0})
    'High Energy Dance'
    """
    missing = [feature for feature in STYLE_FEATURES if feature not in features]
    if missing:
        raise KeyError(f"Missing audio features for classification: {missing}")

    for rule in STYLE_RULES:
        if rule.matches(features):
            return rule.label
    return DEFAULT_STYLE


def music_style_expr() -> pl.Expr:
    """
    Compile the style rules into a single polars ``when/then`` chain.

    Returns
    -------
    pl.Expr
        Expression producing the style label, aliased ``music_style``.
    """
    first, *rest = STYLE_RULES
    chain = pl.when(first.to_expr()).then(pl.lit(first.label))
    for rule in rest:
        chain = chain.when(rule.to_expr()).then(pl.lit(rule.label))
    return chain.otherwise(pl.lit(DEFAULT_STYLE)).alias("music_style")


def with_music_style(tracks: pl.DataFrame) -> pl.DataFrame:
    """Add a ``music_style`` column to a frame of tracks."""
    return tracks.with_columns(music_style_expr())
