from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class VerificationRequest(BaseModel):
    """Request body for the /verify endpoint with validation."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        json_schema_extra={
            "example": {
                "platform": "instagram",
                "sourceUrl": "https://www.instagram.com/p/abc123/",
                "language": "ko",
                "title": "서울 재즈 페스티벌 10.18 공식 예매",
                "text": "올해도 올림픽공원에서 만나요! #서울재즈 @seouljazz",
                "imageUrls": [],
            }
        },
    )

    platform: str = Field(..., min_length=1, max_length=100)
    source_url: str = Field(..., min_length=1, max_length=2048)
    language: Optional[str] = None
    title: Optional[str] = None
    text: Optional[str] = None
    image_urls: Optional[List[str]] = None

    @field_validator("platform", "source_url")
    @classmethod
    def require_value(cls, v, info):
        from utils.validation import InputValidator

        return InputValidator.require_non_blank(v, info.field_name)

    @field_validator("title", "text")
    @classmethod
    def sanitize_text(cls, v):
        from utils.validation import InputValidator

        return InputValidator.sanitize_text(v)
