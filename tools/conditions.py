"""
Condition categories: maps free-text weather descriptions onto the closed set of
classes that drive the scene and background color.
"""
from enum import Enum


class ConditionCategory(str, Enum):
    CLEAR = "Clear"
    PARTLY_CLOUDY = "PartlyCloudy"
    CLOUDY = "Cloudy"
    RAIN = "Rain"
    SNOW = "Snow"
    THUNDERSTORM = "Thunderstorm"
    FOG = "Fog"


# Checked top to bottom; first hit wins ("light rain and snow" is Snow).
_KEYWORD_GROUPS = (
    (("snow",), ConditionCategory.SNOW),
    (("rain", "drizzle"), ConditionCategory.RAIN),
    (("thunder", "storm"), ConditionCategory.THUNDERSTORM),
    (("fog", "mist"), ConditionCategory.FOG),
    (("cloudy", "overcast"), ConditionCategory.CLOUDY),
    (("partly", "few clouds", "scattered"), ConditionCategory.PARTLY_CLOUDY),
)


def classify(description: str) -> ConditionCategory:
    """Case-insensitive keyword match; anything unmatched is Clear."""
    lower = (description or "").lower()
    for keywords, category in _KEYWORD_GROUPS:
        if any(k in lower for k in keywords):
            return category
    return ConditionCategory.CLEAR
