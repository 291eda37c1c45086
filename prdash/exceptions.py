"""
prdash exceptions
"""


class PrDashError(Exception):
    """Base exception for all prdash errors"""

    pass


class FetchFailed(PrDashError):
    """Raised when the gh query fails or returns something unparsable"""

    def __init__(self, message: str, output: str = ""):
        super().__init__(message)
        self.output = output


class UnknownColumn(PrDashError, ValueError):
    """Raised when a configured column name is not a known column"""

    def __init__(self, name: str, valid_names: list[str]):
        super().__init__(
            f"unknown column: {name} (must be one of {', '.join(valid_names)})"
        )
        self.name = name
        self.valid_names = valid_names


class OpenFailed(PrDashError):
    """Raised when a pull request URL could not be opened"""

    pass


class ConfigError(PrDashError):
    """Raised when the configuration file cannot be loaded"""

    pass
