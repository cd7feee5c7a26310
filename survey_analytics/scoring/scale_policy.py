"""Positivity rules and labels per answer scale.

Each scale is a small policy object with one interface,
``classify(raw_value) -> Classification | None``:

  ============  ===================  =====================================
  Scale         Positive when        Label
  ============  ===================  =====================================
  ``1-5``       value >= 4           five-point agreement wording
  ``0-10``      value >= 7           raw value
  ``1-10``      value >= 7           "<v> - Low" / "- Medium" / "- High"
  ============  ===================  =====================================

Values that do not parse as a number classify as ``None``: they are neither
positive nor counted.
"""
from dataclasses import dataclass
from typing import Optional, Union

from survey_analytics.exceptions import UnknownScaleError
from survey_analytics.models.enums import ScaleType

FIVE_POINT_LABELS: dict[int, str] = {
    1: "Strongly Disagree",
    2: "Disagree",
    3: "Neutral",
    4: "Agree",
    5: "Strongly Agree",
}

FIVE_POINT_THRESHOLD = 4
TEN_POINT_THRESHOLD = 7

# 1-10 banding upper bounds (inclusive)
LOW_BAND_MAX = 3
MEDIUM_BAND_MAX = 6


@dataclass(frozen=True)
class Classification:
    """Result of classifying one answer value."""

    value: int
    is_positive: bool
    label: str


def parse_response_value(raw: object) -> Optional[int]:
    """Parse a stored answer into an integer score.

    Accepts ints, integral floats and numeric strings (``"4"``, ``" 4 "``,
    ``"4.0"``). Anything else, including empty strings, booleans,
    non-integral values and digit-separated strings such as ``"1_0"``,
    yields None.
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float):
        return int(raw) if raw.is_integer() else None
    if isinstance(raw, str):
        text = raw.strip()
        if not text or "_" in text:
            return None
        try:
            return int(text)
        except ValueError:
            pass
        try:
            number = float(text)
        except ValueError:
            return None
        return int(number) if number.is_integer() else None
    return None


class ScalePolicy:
    """Base policy: threshold-based positivity, raw value as label."""

    scale: ScaleType
    threshold: int

    def is_positive(self, value: int) -> bool:
        return value >= self.threshold

    def label(self, value: int) -> str:
        return str(value)

    def classify(self, raw: object) -> Optional[Classification]:
        """Classify a raw answer; None when it is not a valid number."""
        value = parse_response_value(raw)
        if value is None:
            return None
        return Classification(value=value, is_positive=self.is_positive(value), label=self.label(value))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(scale={self.scale.value!r})"


class FivePointScale(ScalePolicy):
    """Likert agreement scale."""

    scale = ScaleType.FIVE_POINT
    threshold = FIVE_POINT_THRESHOLD

    def label(self, value: int) -> str:
        return FIVE_POINT_LABELS.get(value, str(value))


class TenPointScale(ScalePolicy):
    """NPS-style 0-10 scale. Label is the bare value; colouring comes from positivity."""

    scale = ScaleType.ZERO_TO_TEN
    threshold = TEN_POINT_THRESHOLD


class BandedTenPointScale(ScalePolicy):
    """1-10 scale shown with low/medium/high bands."""

    scale = ScaleType.ONE_TO_TEN
    threshold = TEN_POINT_THRESHOLD

    def label(self, value: int) -> str:
        if value <= LOW_BAND_MAX:
            return f"{value} - Low"
        if value <= MEDIUM_BAND_MAX:
            return f"{value} - Medium"
        return f"{value} - High"


_POLICIES: dict[ScaleType, ScalePolicy] = {
    ScaleType.FIVE_POINT: FivePointScale(),
    ScaleType.ZERO_TO_TEN: TenPointScale(),
    ScaleType.ONE_TO_TEN: BandedTenPointScale(),
}


def get_scale_policy(scale: Union[ScaleType, str]) -> ScalePolicy:
    """Resolve a scale tag to its policy.

    Raises:
        UnknownScaleError: If the tag is not a supported scale.
    """
    try:
        key = ScaleType(scale)
    except ValueError:
        raise UnknownScaleError(f"Unknown scale: {scale!r}") from None
    return _POLICIES[key]


def classify(scale: Union[ScaleType, str], raw: object) -> Optional[Classification]:
    """Shortcut for ``get_scale_policy(scale).classify(raw)``."""
    return get_scale_policy(scale).classify(raw)


def is_positive(scale: Union[ScaleType, str], raw: object) -> bool:
    """True only for a valid value at or above the scale's threshold."""
    result = classify(scale, raw)
    return result is not None and result.is_positive


def is_valid(raw: object) -> bool:
    """True when ``raw`` parses to an integer score on any scale."""
    return parse_response_value(raw) is not None
