from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, TypeAdapter, constr


class CatImageRecord(BaseModel):
    """One entry of TheCatAPI image search result; only the url is used."""

    model_config = ConfigDict(extra="ignore")

    url: constr(strip_whitespace=True, min_length=1)


CatImageSearchResult = TypeAdapter(List[CatImageRecord])
