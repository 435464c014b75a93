"""
Pydantic schemas for the completion page shown after scoring
"""
from pydantic import Field, HttpUrl, TypeAdapter, ValidationError, field_validator
from typing import Literal, Optional

from app.schemas.base import CamelModel


ShadowSize = Literal["none", "sm", "md", "lg", "xl", "2xl"]
ButtonAction = Literal["retake", "url"]

http_url = TypeAdapter(HttpUrl)


class FinalPageStyles(CamelModel):
    """
    Visual overrides for the completion page

    Every recognized field has a default so renderers never merge ad-hoc
    bags; unknown keys from older rows are dropped on read.
    """
    background_color: str = Field("#f8fafc", max_length=64)
    background_image: str = Field("", max_length=2048)
    background_overlay: str = Field("rgba(0,0,0,0)", max_length=64)
    card_background_color: str = Field("#ffffff", max_length=64)
    card_border_radius: int = Field(12, ge=0)
    card_shadow: ShadowSize = "lg"
    title_font_size: int = Field(24, ge=0)
    title_color: str = Field("#1f2937", max_length=64)
    title_font_weight: int = Field(700, ge=0)
    body_font_size: int = Field(14, ge=0)
    body_color: str = Field("#6b7280", max_length=64)
    score_font_size: int = Field(48, ge=0)
    score_color: str = Field("#3b82f6", max_length=64)
    icon_color: str = Field("#3b82f6", max_length=64)
    icon_background_color: str = Field("#eff6ff", max_length=64)
    show_icon: bool = True
    button_background_color: str = Field("#1f2937", max_length=64)
    button_text_color: str = Field("#ffffff", max_length=64)
    button_border_radius: int = Field(8, ge=0)
    button_font_size: int = Field(14, ge=0)


class FinalPage(CamelModel):
    """Completion page configuration stored on the quiz row"""
    title: str = Field("Congratulations!", max_length=200)
    body: str = Field("You have completed the quiz.", max_length=5000)
    button_text: str = Field("Retake Quiz", max_length=100)
    button_action: ButtonAction = "retake"
    button_url: Optional[str] = Field(None, max_length=2048)
    styles: FinalPageStyles = Field(default_factory=FinalPageStyles)

    @field_validator("button_url", mode="before")
    @classmethod
    def blank_url_is_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("button_url")
    @classmethod
    def url_is_http(cls, value):
        """Checked as an http(s) URL but stored as written"""
        if value is None:
            return value
        try:
            http_url.validate_python(value)
        except ValidationError:
            raise ValueError("buttonUrl must be an http or https URL")
        return value

    @field_validator("styles", mode="before")
    @classmethod
    def missing_styles_use_defaults(cls, value):
        return {} if value is None else value

    def to_storage(self) -> dict:
        """JSON-safe camelCase dict for the `final_page` column"""
        return self.model_dump(by_alias=True, mode="json")


DEFAULT_FINAL_PAGE = FinalPage()
