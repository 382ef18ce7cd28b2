"""Errors raised by the album services"""


class AlbumServiceError(Exception):
    """Base class for client-facing album errors"""


class AlbumNotFoundError(AlbumServiceError):
    """
    No album matches the request.

    Raised for an unknown id, for search criteria with unknown keys and for
    a search that matched nothing.
    """


class EanExistsError(AlbumServiceError):
    """An album with the same EAN is already stored"""

    def __init__(self, ean: str):
        self.ean = ean
        super().__init__(f"EAN {ean} already exists.")


class VersionInvalidError(AlbumServiceError):
    """Version token is not of the form "N" """

    def __init__(self, version):
        self.version = version
        super().__init__(f"Version {version} is invalid.")


class VersionOutdatedError(AlbumServiceError):
    """Submitted version is older than the stored one"""

    def __init__(self, version: int):
        self.version = version
        super().__init__(f"Version {version} is outdated.")
