"""Pydantic models for structured endpoint options and JSON responses.

JSON endpoints hand back the decoded payload as-is; these models describe
the shapes fAPI documents so callers can ``model_validate`` them.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from fapi.models import ImageFormat


class _Wire(BaseModel):
    """Base for payloads that travel with camelCase keys."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


# ---------------------------------------------------------------------------
# /quote
# ---------------------------------------------------------------------------


class EmbedFooter(_Wire):
    text: str
    icon_url: str | None = None
    proxy_icon_url: str | None = None


class EmbedMedia(_Wire):
    url: str | None = None
    proxy_url: str | None = None
    height: int | None = None
    width: int | None = None


class EmbedProvider(_Wire):
    name: str | None = None
    url: str | None = None


class EmbedAuthor(_Wire):
    name: str | None = None
    url: str | None = None
    icon_url: str | None = None
    proxy_icon_url: str | None = None


class EmbedField(_Wire):
    name: str
    value: str
    inline: bool | None = None


class Embed(_Wire):
    """A Discord-style message embed rendered by the quote endpoint."""

    title: str | None = None
    type: str | None = None
    description: str | None = None
    url: str | None = None
    timestamp: str | None = None
    color: int | None = None
    footer: EmbedFooter | None = None
    image: EmbedMedia | None = None
    thumbnail: EmbedMedia | None = None
    video: EmbedMedia | None = None
    provider: EmbedProvider | None = None
    author: EmbedAuthor | None = None
    fields: list[EmbedField] | None = None


class QuoteAuthor(_Wire):
    color: str
    username: str
    bot: bool | None = None
    avatar_url: str = Field(..., alias="avatarURL")


class QuoteOptions(_Wire):
    message: Embed | str
    author: QuoteAuthor
    light: bool | None = None
    compact: bool | None = None
    timestamp: str


# ---------------------------------------------------------------------------
# JSON responses
# ---------------------------------------------------------------------------


class DuckDuckGoResult(BaseModel):
    title: str
    link: str


class DuckDuckGo(BaseModel):
    results: list[DuckDuckGoResult] = Field(default_factory=list)


class UrbanDictionaryResult(BaseModel):
    header: str
    meaning: str
    example: str
    tags: list[str] = Field(default_factory=list)


class PathEntry(BaseModel):
    """One entry of the ``/pathlist`` mapping (keyed by endpoint name)."""

    methods: list[str]
    routes: list[str]


class Point(BaseModel):
    x: float
    y: float


class Mouth(Point):
    width: float
    height: float


class FaceRectangle(BaseModel):
    top: float
    left: float
    width: float
    height: float


class HeadPose(BaseModel):
    roll: float
    yaw: float
    pitch: float


class FaceAttributes(BaseModel):
    head_pose: HeadPose = Field(..., alias="headPose")


class FaceLandmarks(BaseModel):
    pupil_left: Point = Field(..., alias="pupilLeft")
    pupil_right: Point = Field(..., alias="pupilRight")
    mouth: Mouth


class OriginalHeadPose(BaseModel):
    pitch_angle: float
    roll_angle: float
    yaw_angle: float


class OriginalAttributes(BaseModel):
    headpose: OriginalHeadPose


class OriginalFace(BaseModel):
    face_token: str
    face_rectangle: FaceRectangle
    landmark: dict[str, Point]
    attributes: OriginalAttributes


class FaceDetection(BaseModel):
    """Result of ``/facedetection``; ``original`` is the upstream detector's raw payload."""

    model_config = ConfigDict(populate_by_name=True)

    face_rectangle: FaceRectangle = Field(..., alias="faceRectangle")
    face_attributes: FaceAttributes = Field(..., alias="faceAttributes")
    face_landmarks: FaceLandmarks = Field(..., alias="faceLandmarks")
    original: OriginalFace


# ---------------------------------------------------------------------------
# /imagescript
# ---------------------------------------------------------------------------


class ImageScriptResult(BaseModel):
    """Rendered image plus the interpreter's resource usage.

    Times are milliseconds and memory is megabytes; a missing header is NaN.
    """

    image: bytes
    format: ImageFormat
    cpu_time: float
    wall_time: float
    memory_usage: float


EvalTarget = Literal["local", "master", "workers"]

EyesOverlay = Literal[
    "big", "black", "blood", "blue", "googly", "green", "horror", "illuminati",
    "money", "normal", "pink", "red", "small", "spinner", "spongebob", "white",
    "yellow", "lucille",
]
