"""
Data models for responsive image rendering.
"""

from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union

from pydantic import BaseModel, Field


class ResolutionFailure(str, Enum):
    """Reasons an image service could not resolve or process an image."""
    NOT_FOUND = "not_found"
    TYPE_MISMATCH = "type_mismatch"
    OUTSIDE_STORAGE = "outside_storage"
    STORAGE_MISSING = "storage_missing"


class Failure(BaseModel):
    """Tagged failure returned by image service calls instead of raising."""
    reason: ResolutionFailure
    detail: str = ""


class AbsoluteArea(BaseModel):
    """Rectangle in source image pixels."""
    x: int
    y: int
    width: int
    height: int

    def as_dict(self) -> Dict[str, int]:
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}


class Area(BaseModel):
    """Rectangle relative to the image dimensions (all values between 0 and 1)."""
    x: float = 0.0
    y: float = 0.0
    width: float = 1.0
    height: float = 1.0

    @classmethod
    def create_empty(cls) -> "Area":
        """Full-image area, meaning no cropping."""
        return cls(x=0.0, y=0.0, width=1.0, height=1.0)

    def is_empty(self) -> bool:
        return self.x == 0 and self.y == 0 and self.width == 1 and self.height == 1

    @property
    def center(self) -> Tuple[float, float]:
        return (self.x + self.width / 2, self.y + self.height / 2)

    def make_absolute(self, width: int, height: int) -> AbsoluteArea:
        """Convert to pixel coordinates for an image of the given size."""
        return AbsoluteArea(
            x=int(round(self.x * width)),
            y=int(round(self.y * height)),
            width=int(round(self.width * width)),
            height=int(round(self.height * height)),
        )


class CropVariant(BaseModel):
    """A named crop configuration, e.g. "default" or "mobile"."""
    name: str
    crop_area: Area = Field(default_factory=Area.create_empty)
    focus_area: Optional[Area] = None
    selected_ratio: Optional[str] = None


class ImageReference(BaseModel):
    """Handle to a source image owned by the image service."""
    identifier: str
    width: int
    height: int
    mime_type: str = "image/jpeg"
    crop: Optional[str] = None
    alternative: Optional[str] = None
    title: Optional[str] = None
    properties: Dict[str, Any] = Field(default_factory=dict)

    def is_image(self) -> bool:
        return self.mime_type.startswith("image/")


class DerivativeImage(BaseModel):
    """Processed (cropped/resized) image returned by the image service."""
    url: str
    width: int
    height: int


class ProcessingInstructions(BaseModel):
    """Sizing and cropping constraints handed to the image service."""
    width: Optional[int] = None
    min_width: Optional[int] = None
    max_width: Optional[int] = None
    height: Optional[int] = None
    min_height: Optional[int] = None
    max_height: Optional[int] = None
    crop: Optional[AbsoluteArea] = None

    def as_options(self) -> Dict[str, Any]:
        """
        Instructions as a camelCase dictionary.

        Unset and zero dimensions are left out so they cannot force
        unwanted constraints on the processed image.
        """
        options: Dict[str, Any] = {}
        for name, key in (
            ("width", "width"),
            ("min_width", "minWidth"),
            ("max_width", "maxWidth"),
            ("height", "height"),
            ("min_height", "minHeight"),
            ("max_height", "maxHeight"),
        ):
            value = getattr(self, name)
            if value:
                options[key] = value
        options["crop"] = self.crop.as_dict() if self.crop else None
        return options


class Breakpoint(BaseModel):
    """A named responsive design threshold and the image it should get."""
    name: str = ""
    threshold: int = 0
    width: Optional[int] = None
    min_width: Optional[int] = Field(default=None, alias="minWidth")
    max_width: Optional[int] = Field(default=None, alias="maxWidth")
    height: Optional[int] = None
    crop_variant: Optional[str] = Field(default=None, alias="cropVariant")
    media: Optional[str] = None
    sizes: Optional[str] = None
    densities: Optional[List[float]] = None

    class Config:
        populate_by_name = True


class SrcsetCandidate(BaseModel):
    """One entry of a srcset attribute."""
    image: DerivativeImage
    descriptor: str

    def render(self) -> str:
        return f"{self.image.url} {self.descriptor}"


class ResolvedBreakpoint(BaseModel):
    """A breakpoint together with the derivatives generated for it."""
    breakpoint: Breakpoint
    candidates: List[SrcsetCandidate] = Field(default_factory=list)
    media: Optional[str] = None
    sizes: Optional[str] = None

    @property
    def srcset(self) -> str:
        return ", ".join(candidate.render() for candidate in self.candidates)


class ImageArguments(BaseModel):
    """Arguments accepted by the responsive image renderers."""
    src: Optional[str] = None
    image: Optional[ImageReference] = None
    treat_id_as_reference: bool = Field(default=False, alias="treatIdAsReference")

    width: Optional[int] = None
    height: Optional[int] = None
    min_width: Optional[int] = Field(default=None, alias="minWidth")
    max_width: Optional[int] = Field(default=None, alias="maxWidth")
    min_height: Optional[int] = Field(default=None, alias="minHeight")
    max_height: Optional[int] = Field(default=None, alias="maxHeight")
    crop: Optional[str] = None
    crop_variant: Optional[str] = Field(default=None, alias="cropVariant")

    srcset: Optional[Union[str, int, List[Any]]] = None
    breakpoints: Optional[List[Any]] = None
    sizes: Optional[str] = None
    picturefill: Optional[bool] = None
    lazyload: Optional[bool] = None
    ratio_box: Union[bool, float, str] = Field(default=False, alias="ratioBox")
    absolute: bool = False

    alt: Optional[str] = None
    title: Optional[str] = None
    css_class: Optional[str] = Field(default=None, alias="class")

    class Config:
        populate_by_name = True
