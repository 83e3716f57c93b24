import pytest

from map_engine.display import DisplayMetricsError, FixedAspectRatio, ScreenDimensions


def test_screen_dimensions_aspect_ratio() -> None:
    assert ScreenDimensions(width=1920, height=1080).aspect_ratio() == pytest.approx(16 / 9)


def test_screen_dimensions_can_change_between_reads() -> None:
    portrait = ScreenDimensions(width=390, height=844)
    landscape = ScreenDimensions(width=844, height=390)
    assert portrait.aspect_ratio() < 1 < landscape.aspect_ratio()


@pytest.mark.parametrize(
    ("width", "height"),
    [(None, 844), (390, None), (0, 844), (390, 0), (-390, 844), (390, float("nan"))],
)
def test_unusable_screen_dimensions_raise(width, height) -> None:
    with pytest.raises(DisplayMetricsError):
        ScreenDimensions(width=width, height=height).aspect_ratio()


def test_fixed_aspect_ratio() -> None:
    assert FixedAspectRatio(0.75).aspect_ratio() == 0.75
