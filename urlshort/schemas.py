from __future__ import annotations

from pydantic import BaseModel, ConfigDict, StrictStr, TypeAdapter, field_validator


class PathRedirect(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    path: StrictStr = ""
    url: StrictStr = ""

    # `path:` with no value decodes to None; treat it like a missing key
    @field_validator("path", "url", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return "" if value is None else value


PathRedirectList = TypeAdapter(list[PathRedirect])
