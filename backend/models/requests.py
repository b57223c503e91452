from pydantic import BaseModel, ConfigDict, Field

class TextValidationRequest(BaseModel):
    text: str = Field(..., max_length=100_000)

    model_config = ConfigDict(
        json_schema_extra={"example": {"text": "Congratulations! You are our lucky winner, click here"}}
    )

class ImageValidationRequest(BaseModel):
    image_url: str = Field(..., alias="imageUrl", max_length=8192)

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={"example": {"imageUrl": "https://images.unsplash.com/photo.png"}},
    )

class VideoValidationRequest(BaseModel):
    video_url: str = Field(..., alias="videoUrl", max_length=8192)

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={"example": {"videoUrl": "https://www.youtube.com/watch?v=dQw4w9WgXcQ"}},
    )

class URLValidationRequest(BaseModel):
    url: str = Field(..., max_length=8192)

    model_config = ConfigDict(
        json_schema_extra={"example": {"url": "https://github.com/login"}}
    )
