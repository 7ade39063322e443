"""Domain level error conditions."""


class NotFoundError(ValueError):
    """Raised when a referenced user, resident or facility does not exist."""


__all__ = ["NotFoundError"]
