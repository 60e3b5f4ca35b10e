from pydantic import BaseModel, ConfigDict, Field

from src.app.config import SchemaVersion


class AnalyzeRequest(BaseModel):
    """Body schema for POST /api/analyze."""
    image: str | None = None


class AnalyzeResponse(BaseModel):
    """Response schema for POST /api/analyze."""
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    content: str
    is_snake_image: bool = Field(alias="isSnakeImage")
    schema_version: SchemaVersion | None = Field(default=None, alias="schemaVersion")


class ErrorResponse(BaseModel):
    """Body returned with 400 / 500 responses."""
    error: str
