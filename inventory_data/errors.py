"""Exceptions raised while loading the inventory datasets."""


class LoadError(Exception):
    """Base class for failures that leave a dashboard panel without data."""

    def __init__(self, message, resource=None):
        super().__init__(message)
        self.resource = resource


class NetworkError(LoadError):
    """The resource could not be fetched."""


class ParseError(LoadError):
    """The resource was fetched but is not a usable CSV table."""


class EmptyDatasetError(LoadError):
    """The CSV parsed but no valid rows survived filtering."""
