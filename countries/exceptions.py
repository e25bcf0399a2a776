class CatalogError(Exception):
    """Base class for errors raised by the country catalog."""
    pass


class SourceUnavailable(CatalogError):
    """Raised when an external data source cannot be fetched."""

    def __init__(self, source, status=None, detail=None):
        self.source = source
        self.status = status
        self.detail = detail
        message = f"Could not fetch data from {source}"
        if status is not None:
            message += f" (status: {status})"
        if detail:
            message += f": {detail}"
        super().__init__(message)


class NoData(CatalogError):
    """Raised when an external source answered but gave nothing usable."""
    pass


class SourceDataInvalid(NoData):
    """Raised when an external payload is empty or malformed."""

    def __init__(self, source, detail):
        self.source = source
        self.detail = detail
        super().__init__(f"{source} returned unusable data: {detail}")


class ValidationFailed(CatalogError):
    def __init__(self, details):
        self.details = details
        super().__init__("Validation failed")


class NotFound(CatalogError):
    pass
