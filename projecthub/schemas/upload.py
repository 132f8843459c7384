from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class UploadResponse(BaseModel):
    """
    Either {url, filename, bucket} for object storage or
    {url, mimeType, size, storage: "base64"} for the inline fallback.
    Callers store `url` verbatim and should not parse it.
    """
    url: str
    filename: Optional[str] = None
    bucket: Optional[str] = None
    mime_type: Optional[str] = Field(default=None, alias="mimeType")
    size: Optional[int] = None
    storage: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)
