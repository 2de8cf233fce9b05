"""Request and result types shared by the generation route and the studio client."""

from dataclasses import dataclass


@dataclass(frozen=True)
class GenerationRequest:
    """One prompt/style/size tuple, as issued by the user."""

    prompt: str
    style: str = "artistic"
    size: str = "1024x1024"

    def to_dict(self) -> dict:
        return {"prompt": self.prompt, "style": self.style, "size": self.size}


@dataclass
class GenerationResult:
    """First image returned by the provider for one request."""

    image_url: str
    prompt: str
    width: int
    height: int

    def to_dict(self) -> dict:
        """Wire form, camelCase like the browser UI expects."""
        return {
            "imageUrl": self.image_url,
            "prompt": self.prompt,
            "width": self.width,
            "height": self.height,
        }

    @staticmethod
    def from_dict(data: dict) -> "GenerationResult":
        return GenerationResult(
            image_url=data["imageUrl"],
            prompt=data.get("prompt", ""),
            width=int(data.get("width") or 0),
            height=int(data.get("height") or 0),
        )


@dataclass
class FalImage:
    """Image entry of a fal text-to-image response."""

    url: str
    width: int | None = None
    height: int | None = None
    content_type: str | None = None

    @staticmethod
    def from_dict(data: dict) -> "FalImage":
        return FalImage(
            url=data["url"],
            width=data.get("width"),
            height=data.get("height"),
            content_type=data.get("content_type"),
        )
