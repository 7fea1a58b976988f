"""Generated project file change tracking."""

from .last_write import LastWriteTracker

__all__ = ["LastWriteTracker"]
