# /app/core/exceptions.py

"""Application-specific exceptions raised by the page managers."""


class LabGroupsError(Exception):
    """Base exception for all lab group errors."""

    pass


class NotAMemberError(LabGroupsError):
    """Raised when a student tries to leave while not in any group."""

    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__(f"User '{user_id}' is not a member of any group")


class UnsupportedFileError(LabGroupsError):
    """Raised when an uploaded file is not a CSV file."""

    def __init__(self, filename: str, content_type: str):
        self.filename = filename
        self.content_type = content_type
        super().__init__(f"Unsupported file '{filename}' ({content_type})")


class BackendError(LabGroupsError):
    """Raised when a lookup fails for a reason other than a missing row."""

    def __init__(self, action: str, cause: str):
        self.action = action
        self.cause = cause
        super().__init__(f"Backend error while {action}: {cause}")


class CSVParseError(LabGroupsError):
    """Raised when an uploaded CSV file cannot be read into rows."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Failed to parse CSV file: {reason}")
