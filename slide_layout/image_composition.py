"""Interface to the image composition collaborator.

The decision engine never touches pixel data. It only knows which layouts
reserve an image region and at roughly which aspect ratio; fitting an image
into that region is delegated to an :class:`ImageComposer` implementation.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Protocol, Tuple

# Ratios within this tolerance are treated as already matching.
RATIO_TOLERANCE = 0.01


class CompositionStrategy(str, Enum):
    CROP = "crop"
    EXTEND = "extend"
    FIT = "fit"
    FILL = "fill"
    SMART = "smart"


@dataclass(frozen=True, slots=True)
class AspectRatio:
    width: int
    height: int

    @classmethod
    def parse(cls, value: str) -> "AspectRatio":
        try:
            width, height = (int(part) for part in value.split(":", 1))
        except ValueError as exc:
            raise ValueError(f"Invalid aspect ratio '{value}', expected 'W:H'") from exc
        if width <= 0 or height <= 0:
            raise ValueError(f"Invalid aspect ratio '{value}', sides must be positive")
        return cls(width, height)

    @property
    def value(self) -> float:
        return self.width / self.height

    def __str__(self) -> str:
        return f"{self.width}:{self.height}"


WIDESCREEN = AspectRatio(16, 9)
STANDARD = AspectRatio(4, 3)
SQUARE = AspectRatio(1, 1)


@dataclass(frozen=True, slots=True)
class CropArea:
    left: int
    top: int
    width: int
    height: int

    def to_dict(self) -> Dict[str, int]:
        return {"left": self.left, "top": self.top, "width": self.width, "height": self.height}


@dataclass(slots=True)
class CompositionResult:
    image: Any
    applied_strategy: CompositionStrategy
    crop_area: Optional[CropArea] = None


class ImageComposer(Protocol):
    """Fits an image into a target aspect ratio."""

    def convert(
        self,
        image: Any,
        target_ratio: AspectRatio,
        strategy: CompositionStrategy,
    ) -> CompositionResult:
        ...


@dataclass(frozen=True, slots=True)
class ImageRegionHint:
    """Image area a layout reserves, handed to the composer by the renderer."""

    layout_id: str
    target_ratio: AspectRatio
    strategy: CompositionStrategy = CompositionStrategy.SMART

    def to_dict(self) -> Dict[str, str]:
        return {
            "layout_id": self.layout_id,
            "target_ratio": str(self.target_ratio),
            "strategy": self.strategy.value,
        }


LAYOUT_IMAGE_RATIOS: Dict[str, AspectRatio] = {
    "image-right": STANDARD,
    "image-left": STANDARD,
    "hero": WIDESCREEN,
    "image-focus": WIDESCREEN,
    "creative-showcase": WIDESCREEN,
}


def image_region_for_layout(layout_id: str) -> Optional[ImageRegionHint]:
    ratio = LAYOUT_IMAGE_RATIOS.get(layout_id)
    if ratio is None:
        return None
    return ImageRegionHint(layout_id=layout_id, target_ratio=ratio)


# ---------------------------------------------------------------------------
# Geometry helpers for composer implementations
# ---------------------------------------------------------------------------

_MINIMUM_LONG_SIDE = {
    WIDESCREEN: (1920, 1080),
    STANDARD: (1600, 1200),
}


def target_dimensions(width: int, height: int, ratio: AspectRatio) -> Tuple[int, int]:
    """Output size for an image of ``width`` x ``height`` at ``ratio``.

    The larger source side is kept (or raised to a presentation-friendly
    minimum) and the other side follows the ratio.
    """

    if ratio.width == ratio.height:
        size = max(width, height, 1024)
        return size, size
    min_width, min_height = _MINIMUM_LONG_SIDE.get(ratio, (0, 0))
    if width >= height:
        target_width = max(width, min_width)
        return target_width, round(target_width * ratio.height / ratio.width)
    target_height = max(height, min_height)
    return round(target_height * ratio.width / ratio.height), target_height


def center_crop_area(width: int, height: int, ratio: AspectRatio) -> CropArea:
    """Largest centered region of ``width`` x ``height`` matching ``ratio``."""

    if width <= 0 or height <= 0:
        return CropArea(0, 0, max(width, 0), max(height, 0))
    current = width / height
    if abs(current - ratio.value) < RATIO_TOLERANCE:
        return CropArea(0, 0, width, height)
    if current > ratio.value:
        crop_width = round(height * ratio.value)
        return CropArea((width - crop_width) // 2, 0, crop_width, height)
    crop_height = round(width / ratio.value)
    return CropArea(0, (height - crop_height) // 2, width, crop_height)
