from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class FilePayload(BaseModel):
    """An uploaded file as sent by the browser: base64 content plus metadata."""

    model_config = ConfigDict(populate_by_name=True)

    data: str = ""
    media_type: str = Field(default="application/octet-stream", alias="mediaType")
    filename: str = ""


class ParseDocumentRequest(BaseModel):
    file: FilePayload | None = None


class ExportCsvRequest(BaseModel):
    records: list[dict[str, Any]] = Field(default_factory=list)
