from typing import Optional

from pydantic import BaseModel, Field


class SessionState(BaseModel):
    """
    Explicit application state shared by the action handlers.

    Holds what a client needs to restore its views: the last location
    queried, the record currently selected in the detail view, the record
    being edited, and the latest user-visible error.
    """

    location: Optional[str] = Field(default=None, description="Last location text submitted")
    selected_record_id: Optional[str] = Field(default=None, description="Record shown in the detail view")
    editing_record_id: Optional[str] = Field(default=None, description="Record currently being edited")
    last_error: Optional[str] = Field(default=None, description="Latest error message (replaces any prior one)")

    def begin(self, location: Optional[str] = None) -> None:
        """Start an action: clear the previous error and remember the location text."""
        self.last_error = None
        if location is not None:
            self.location = location

    def fail(self, message: str) -> None:
        self.last_error = message

    def forget_record(self, record_id: str) -> None:
        # A deleted record can no longer be selected or edited.
        if self.selected_record_id == record_id:
            self.selected_record_id = None
        if self.editing_record_id == record_id:
            self.editing_record_id = None
