from .navigation import CursorOutcome, CursorResult, NavigationCursor

__all__ = ["CursorOutcome", "CursorResult", "NavigationCursor"]
