from pydantic import AliasChoices, BaseModel, Field, computed_field, ConfigDict
from typing import Optional
from datetime import datetime
from shortlink_app.config import settings


class LinkCreate(BaseModel):
    # Accepts {"url": ...} as well as {"long_url": ...}
    url: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("url", "long_url"),
        description="The URL to be shortened; https:// is added when no scheme is given",
    )


class LinkResponse(BaseModel):
    """Serializes a Link model straight from its attributes"""
    id: int
    short_code: str
    long_url: str
    click_count: int
    created_at: datetime

    @computed_field
    @property
    def short_url(self) -> str:
        return f"{settings.base_url.rstrip('/')}/{self.short_code}"

    model_config = ConfigDict(from_attributes=True)


class LinkStats(BaseModel):
    id: int
    short_code: str
    long_url: str
    created_at: datetime
    click_count: int

    model_config = ConfigDict(from_attributes=True)
