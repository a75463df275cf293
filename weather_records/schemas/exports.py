from enum import Enum
from typing import Optional

from pydantic import BaseModel


class ExportFormat(str, Enum):
    JSON = "json"
    CSV = "csv"
    XML = "xml"
    MARKDOWN = "markdown"


class ExportResult(BaseModel):
    """
    Rendered export document.

    When there is nothing to export, `content` is None and `notice` holds
    the message to show instead of a file.
    """

    content: Optional[str] = None
    mime_type: Optional[str] = None
    filename: Optional[str] = None
    notice: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return self.content is None
