from pydantic import BaseModel, ConfigDict, Field


class MessageOut(BaseModel):
    message: str = Field(..., description="Localized outcome message")


class ErrorOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    path: str = Field(..., description="The requested path")
    timestamp: int = Field(..., description="Milliseconds since epoch")
    message: str = Field(..., description="Localized failure summary")
    validation_errors: dict[str, str] | None = Field(
        None,
        alias="validationErrors",
        description="Per-field messages, only for validation failures",
    )

    def to_body(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)
