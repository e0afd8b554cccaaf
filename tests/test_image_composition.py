import pytest

from slide_layout.image_composition import (
    SQUARE,
    STANDARD,
    WIDESCREEN,
    AspectRatio,
    CompositionResult,
    CompositionStrategy,
    CropArea,
    center_crop_area,
    image_region_for_layout,
    target_dimensions,
)


def test_parse_aspect_ratio():
    assert AspectRatio.parse("16:9") == WIDESCREEN
    assert str(STANDARD) == "4:3"
    for bad in ("abc", "16x9", "0:9", "4:-3"):
        with pytest.raises(ValueError):
            AspectRatio.parse(bad)


def test_image_regions_per_layout():
    assert image_region_for_layout("image-left").target_ratio == STANDARD
    assert image_region_for_layout("hero").target_ratio == WIDESCREEN
    assert image_region_for_layout("hero").strategy is CompositionStrategy.SMART
    assert image_region_for_layout("title") is None


def test_target_dimensions_respect_minimums():
    assert target_dimensions(800, 600, WIDESCREEN) == (1920, 1080)
    assert target_dimensions(600, 800, STANDARD) == (1600, 1200)
    assert target_dimensions(3200, 1000, STANDARD) == (3200, 2400)
    assert target_dimensions(500, 300, SQUARE) == (1024, 1024)


def test_center_crop_area():
    assert center_crop_area(1920, 1080, WIDESCREEN) == CropArea(0, 0, 1920, 1080)
    assert center_crop_area(1600, 1600, WIDESCREEN) == CropArea(0, 350, 1600, 900)
    assert center_crop_area(1600, 900, STANDARD) == CropArea(200, 0, 1200, 900)
    assert center_crop_area(0, 10, SQUARE) == CropArea(0, 0, 0, 10)


class _RecordingComposer:
    def __init__(self):
        self.calls = []

    def convert(self, image, target_ratio, strategy):
        self.calls.append((target_ratio, strategy))
        return CompositionResult(image=image, applied_strategy=strategy)


def test_region_hint_drives_composer():
    composer = _RecordingComposer()
    hint = image_region_for_layout("image-right")

    result = composer.convert(b"png", hint.target_ratio, hint.strategy)

    assert composer.calls == [(STANDARD, CompositionStrategy.SMART)]
    assert result.crop_area is None
    assert hint.to_dict() == {"layout_id": "image-right", "target_ratio": "4:3", "strategy": "smart"}
