from typing import List

from pydantic import BaseModel, ConfigDict, Field


class SearchRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str
    slug: str
    description: str = ""
    tags: List[str] = Field(default_factory=list)
    # Serialized as "content" in search.json
    snippet: str = Field("", alias="content")
