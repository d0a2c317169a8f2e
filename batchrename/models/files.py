"""Source file data models."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class SourceFile(BaseModel):
    """A candidate file supplied by a file source.

    The engine only reads these fields for naming and sorting; it never mutates them.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Identifier understood by the rename executor")
    name: str = Field(description="Current filename, including extension")
    path: str = Field(description="Location of the file as reported by the file source", default="")
    size_bytes: int = Field(description="File size in bytes", ge=0, default=0)
    mime_type: str = Field(description="MIME type, e.g. 'image/jpeg'", default="application/octet-stream")
    last_modified: datetime = Field(description="Last modification time")

    def __str__(self) -> str:
        return f"SourceFile('{self.name}', size={self.size_bytes})"

    @property
    def extension(self) -> str:
        """Text after the last period, or an empty string when there is none."""
        if "." not in self.name:
            return ""
        return self.name.rsplit(".", 1)[1]

    @property
    def stem(self) -> str:
        if "." not in self.name:
            return self.name
        return self.name.rsplit(".", 1)[0]

    @property
    def is_image(self) -> bool:
        return self.mime_type.lower().startswith("image/")

    @property
    def is_video(self) -> bool:
        return self.mime_type.lower().startswith("video/")

    @property
    def is_audio(self) -> bool:
        return self.mime_type.lower().startswith("audio/")

    @property
    def formatted_size(self) -> str:
        """Human readable size (B, KB, MB or GB)."""
        size = self.size_bytes
        if size < 1024:
            return f"{size} B"
        if size < 1024**2:
            return f"{size // 1024} KB"
        if size < 1024**3:
            return f"{size // 1024**2} MB"
        return f"{size // 1024**3} GB"


class SelectionCriteria(BaseModel):
    """Which files a file source should return."""

    directory: str = Field(description="Directory to list")
    include_images: bool = Field(default=True, description="Include image/* files")
    include_videos: bool = Field(default=True, description="Include video/* files")
    include_audio: bool = Field(default=False, description="Include audio/* files")
    extensions: list[str] = Field(
        default_factory=list,
        description="Extensions (without the dot) that are always included, compared case-insensitively",
    )
    min_size: int | None = Field(default=None, ge=0, description="Minimum size in bytes (inclusive)")
    max_size: int | None = Field(default=None, ge=0, description="Maximum size in bytes (inclusive)")
    include_hidden: bool = Field(default=False, description="Include dot-files")

    @property
    def has_media_type_selected(self) -> bool:
        return self.include_images or self.include_videos or self.include_audio

    @property
    def normalized_extensions(self) -> set[str]:
        return {ext.lstrip(".").lower() for ext in self.extensions if ext.lstrip(".")}

    def matches(self, file: SourceFile) -> bool:
        """Check whether a file satisfies the media type, extension and size filters."""
        if self.min_size is not None and file.size_bytes < self.min_size:
            return False
        if self.max_size is not None and file.size_bytes > self.max_size:
            return False

        if file.extension.lower() in self.normalized_extensions:
            return True

        return (
            (self.include_images and file.is_image)
            or (self.include_videos and file.is_video)
            or (self.include_audio and file.is_audio)
        )
