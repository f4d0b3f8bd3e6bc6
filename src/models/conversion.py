"""Conversion request/response models."""
from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, Field

from .slide import QualityTier


class ConversionType(str, Enum):
    """Artifact formats a slide set can be exported to."""

    PDF = "PDF"
    PPTX = "PPTX"
    IMAGES_ZIP = "IMAGES_ZIP"

    @property
    def extension(self) -> str:
        return _EXTENSIONS[self]

    @property
    def success_message(self) -> str:
        return f"{self.value.replace('_', ' ')} generated successfully."

    @classmethod
    def parse(cls, value: str) -> "ConversionType":
        """Parse ``pdf``/``pptx``/``images_zip`` in any letter case."""
        return cls(value.strip().upper())


_EXTENSIONS = {
    ConversionType.PDF: "pdf",
    ConversionType.PPTX: "pptx",
    ConversionType.IMAGES_ZIP: "zip",
}


@dataclass(frozen=True)
class ExportResult:
    """Where the published artifact landed and how big it is."""

    remote_path: str
    size_bytes: int


class ConvertData(BaseModel):
    """Payload describing a published artifact."""

    thumbnail: str = Field(..., description="URL of the first selected slide image")
    quality: QualityTier = Field(..., description="Requested quality tier")
    conversion_type: ConversionType = Field(..., description="Artifact format")
    slides_download_link: str = Field(..., description="Public download URL")
    file_name: str = Field(..., description="Artifact file name")
    size: int = Field(..., ge=0, description="Artifact size in bytes")
    title: str = Field(default="", description="Presentation page title")


class ConvertResponse(BaseModel):
    """Successful /convert response."""

    success: bool = True
    message: str
    data: ConvertData


class ErrorResponse(BaseModel):
    """Error body returned for every failed request."""

    success: bool = False
    error: bool = True
    detail: str
