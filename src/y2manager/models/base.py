from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class FileModel(BaseModel):
    """Model for a section of the bridge config file.

    Keys this manager does not know about are kept so that rewriting the file
    never drops bridge options.
    """

    model_config = {"extra": "allow", "populate_by_name": True}

    def to_data(self) -> dict[str, Any]:
        """Plain data with the file's key spelling.

        Fields that were never set are omitted; values read from the file,
        explicit nulls included, are kept.
        """
        return self.model_dump(by_alias=True, exclude_unset=True)
