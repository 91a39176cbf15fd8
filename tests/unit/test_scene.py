"""Unit tests for scene helpers: background color, animation frames, heading."""
from tools.conditions import ConditionCategory
from ui.scene import DARK_GRAY, GRAY, SKY_BLUE, WHITE, background_color, heading, scene_frame


def test_background_colors():
    assert background_color(ConditionCategory.CLEAR) == SKY_BLUE
    assert background_color(ConditionCategory.PARTLY_CLOUDY) == SKY_BLUE
    assert background_color(ConditionCategory.CLOUDY) == GRAY
    assert background_color(ConditionCategory.RAIN) == DARK_GRAY
    assert background_color(ConditionCategory.SNOW) == DARK_GRAY
    assert background_color(ConditionCategory.FOG) == WHITE


def test_every_category_has_frames():
    for category in ConditionCategory:
        assert scene_frame(category, 0.0)


def test_frames_advance_with_time():
    assert scene_frame(ConditionCategory.THUNDERSTORM, 0.0) != scene_frame(ConditionCategory.THUNDERSTORM, 0.5)
    assert scene_frame(ConditionCategory.THUNDERSTORM, 0.0) == scene_frame(ConditionCategory.THUNDERSTORM, 1.0)
    assert scene_frame(ConditionCategory.CLOUDY, -3.0) == scene_frame(ConditionCategory.CLOUDY, 0.0)


def test_heading():
    assert heading("Paris", "Light snow") == "Today's weather for Paris - Light snow"
    assert heading(None, None) == "Today's Weather"
