from __future__ import annotations

import uuid
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field

KEY_FIELD = "__KEY"
VALUE_FIELD = "__VALUE"
ID_FIELD = "_id"
VERSION_FIELD = "__v"


class InternalRecord(BaseModel):
    """
    The flat-key storage format: every top-level database key is kept as
      { "__KEY": "<key>", "__VALUE": <whole value tree> }

    Backend metadata (_id, __v) is ignored on validation, so dumping a
    validated record yields exactly the two public fields.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    key: str = Field(alias=KEY_FIELD)
    value: Any = Field(default=None, alias=VALUE_FIELD)

    @classmethod
    def from_document(cls, doc: Mapping[str, Any]) -> "InternalRecord":
        return cls.model_validate(doc)

    def to_public_doc(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


def new_stored_document(key: str, value: Any) -> dict[str, Any]:
    """Build a document as a backend stores it, metadata included."""
    return {
        ID_FIELD: uuid.uuid4().hex,
        KEY_FIELD: key,
        VALUE_FIELD: value,
        VERSION_FIELD: 0,
    }


def strip_metadata(docs: list[Mapping[str, Any]]) -> list[dict[str, Any]]:
    return [InternalRecord.from_document(doc).to_public_doc() for doc in docs]
