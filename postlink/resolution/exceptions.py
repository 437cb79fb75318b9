class ResolutionError(Exception):
    """Base exception for all group-resolution errors."""


class GroupNotFoundError(ResolutionError):
    """Raised when no strategy finds a group for a file name."""

    def __init__(self, original_file_name: str) -> None:
        super().__init__(f"Group not found for filename '{original_file_name}'")
        self.original_file_name = original_file_name
