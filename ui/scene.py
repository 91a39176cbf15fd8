"""
Scene helpers for the render loop. Inputs are only the condition category and
elapsed seconds, so everything here is pure and testable without Streamlit.
"""
import math

from tools.conditions import ConditionCategory

SKY_BLUE = "#87CEFA"
GRAY = "#A0A0A0"
DARK_GRAY = "#606060"
WHITE = "#FFFFFF"

BACKGROUND_COLORS = {
    ConditionCategory.CLEAR: SKY_BLUE,
    ConditionCategory.PARTLY_CLOUDY: SKY_BLUE,
    ConditionCategory.CLOUDY: GRAY,
    ConditionCategory.RAIN: DARK_GRAY,
    ConditionCategory.SNOW: DARK_GRAY,
    ConditionCategory.THUNDERSTORM: DARK_GRAY,
    ConditionCategory.FOG: WHITE,
}

# Frames cycle at FRAMES_PER_SECOND; a thunderstorm alternates with a lightning frame.
_FRAMES = {
    ConditionCategory.CLEAR: ("☀️", "🌞"),
    ConditionCategory.PARTLY_CLOUDY: ("⛅", "🌤️"),
    ConditionCategory.CLOUDY: ("☁️",),
    ConditionCategory.RAIN: ("🌧️", "🌧️💧", "🌧️💧💧"),
    ConditionCategory.SNOW: ("🌨️", "🌨️❄️", "🌨️❄️❄️"),
    ConditionCategory.THUNDERSTORM: ("⛈️", "🌩️"),
    ConditionCategory.FOG: ("🌫️", "🌁"),
}
FRAMES_PER_SECOND = 2


def background_color(category: ConditionCategory) -> str:
    return BACKGROUND_COLORS.get(category, WHITE)


def scene_frame(category: ConditionCategory, elapsed: float) -> str:
    """Glyph for this point of the animation; negative elapsed counts as 0."""
    frames = _FRAMES.get(category, _FRAMES[ConditionCategory.CLEAR])
    step = math.floor(max(elapsed, 0.0) * FRAMES_PER_SECOND)
    return frames[step % len(frames)]


def heading(location_label, short_description) -> str:
    if location_label and short_description:
        return f"Today's weather for {location_label} - {short_description}"
    return "Today's Weather"
