"""Exceptions raised while capturing stats."""


class ParseError(ValueError):
    """The page does not have the structure the parser expects."""


class FetchError(RuntimeError):
    """A page could not be downloaded."""

    def __init__(self, url: str, status: int) -> None:
        super().__init__(f"GET {url} failed with HTTP {status}")
        self.url = url
        self.status = status
