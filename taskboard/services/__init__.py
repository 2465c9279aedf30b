from taskboard.services import calendar_service, optimistic, view_service


__all__ = [
    "calendar_service",
    "optimistic",
    "view_service",
]
