"""Style and size options and their mapping to provider parameters.

Styles append a fixed descriptive suffix to the prompt. Sizes map to the
aspect-ratio token accepted by the flux-pro ultra endpoint. Unknown or missing
values fall back to `Style.generic` and `ImageSize.square`.
"""
from enum import Enum
from typing import Any, Optional


class Style(str, Enum):
    photorealistic = "photorealistic"
    artistic = "artistic"
    anime = "anime"
    digital_art = "digital-art"
    # Fallback for anything the UI does not offer
    generic = "generic"

    @staticmethod
    def parse(value: Any) -> "Style":
        """Parse a user-supplied style, falling back to `Style.generic`."""
        try:
            return Style(value)
        except (ValueError, TypeError):
            return Style.generic

    @property
    def suffix(self) -> str:
        return _STYLE_SUFFIXES[self]

    @property
    def label(self) -> str:
        return _STYLE_LABELS[self]

    def apply(self, prompt: str) -> str:
        """Return the prompt with this style's suffix appended."""
        return f"{prompt}, {self.suffix}"


_STYLE_SUFFIXES = {
    Style.photorealistic: "photorealistic, high detail, 8k resolution, professional photography",
    Style.artistic: "artistic style, beautiful composition, creative interpretation",
    Style.anime: "anime style, manga art, vibrant colors, detailed illustration",
    Style.digital_art: "digital art, concept art, detailed illustration, trending on artstation",
    Style.generic: "high quality, detailed",
}

_STYLE_LABELS = {
    Style.photorealistic: "Photorealistic",
    Style.artistic: "Artistic",
    Style.anime: "Anime",
    Style.digital_art: "Digital Art",
    Style.generic: "Default",
}


class ImageSize(str, Enum):
    landscape = "1024x768"
    portrait = "768x1024"
    square = "1024x1024"

    @staticmethod
    def parse(value: Any) -> "ImageSize":
        """Parse a user-supplied size, falling back to `ImageSize.square`."""
        try:
            return ImageSize(value)
        except (ValueError, TypeError):
            return ImageSize.square

    @property
    def aspect_ratio(self) -> str:
        return _ASPECT_RATIOS[self]

    @property
    def width(self) -> int:
        return int(self.value.split("x")[0])

    @property
    def height(self) -> int:
        return int(self.value.split("x")[1])

    @property
    def label(self) -> str:
        return f"{self.name.capitalize()} ({self.width}×{self.height})"


_ASPECT_RATIOS = {
    ImageSize.landscape: "4:3",
    ImageSize.portrait: "3:4",
    ImageSize.square: "1:1",
}

DEFAULT_STYLE = Style.artistic
DEFAULT_SIZE = ImageSize.square


def expand_prompt(prompt: str, style: Optional[str]) -> str:
    """Append the suffix of `style` (or the generic one) to `prompt`."""
    return Style.parse(style).apply(prompt)


def resolve_aspect_ratio(size: Optional[str]) -> str:
    """Map a pixel size string to the provider's aspect-ratio token.

    Args:
        size: One of "1024x768", "768x1024", "1024x1024"

    Returns:
        "4:3", "3:4" or "1:1". Falls back to "1:1" for anything else.
    """
    return ImageSize.parse(size).aspect_ratio


def list_options() -> dict[str, Any]:
    """Get the selectable styles and sizes for API response."""
    styles = [
        {"id": style.value, "name": style.label, "suffix": style.suffix}
        for style in Style
        if style is not Style.generic
    ]
    sizes = [
        {
            "id": size.value,
            "name": size.label,
            "width": size.width,
            "height": size.height,
            "aspect_ratio": size.aspect_ratio,
        }
        for size in (ImageSize.square, ImageSize.landscape, ImageSize.portrait)
    ]
    return {
        "styles": styles,
        "sizes": sizes,
        "default_style": DEFAULT_STYLE.value,
        "default_size": DEFAULT_SIZE.value,
    }
