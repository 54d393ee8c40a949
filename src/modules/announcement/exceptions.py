class AnnouncementError(Exception):
    """Base class for every failure raised by the announcement pipeline."""


class UnknownCategoryError(AnnouncementError):
    def __init__(self, key: str) -> None:
        super().__init__(f"Announcement category '{key}' is not configured")
        self.key = key


class StructuredFetchError(AnnouncementError):
    """The CMS list API did not yield articles for the requested catalog."""


class CatalogNotFoundError(StructuredFetchError):
    pass


class StructuredTransportError(StructuredFetchError):
    pass


class StructuredTimeoutError(StructuredTransportError):
    pass


class ExtractionError(AnnouncementError):
    """The rendered announcement page did not yield an article list."""
