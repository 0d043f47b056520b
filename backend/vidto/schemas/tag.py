from pydantic import BaseModel, ConfigDict, Field, field_validator


class TagBase(BaseModel):
    """Base tag schema."""

    name: str
    color: str


class TagCreate(TagBase):
    """Schema for creating a tag."""

    name: str = Field(min_length=1, max_length=100)
    color: str = Field(pattern=r"^#[0-9A-Fa-f]{6}$")

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Name is required")
        return value


class TagResponse(TagBase):
    """Tag response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: str
