"""Custom exceptions for hyperex."""


class HyperexError(Exception):
    """Base exception for all hyperex errors."""
    pass


class ConfigurationError(HyperexError):
    """Exception raised for configuration errors."""

    def __init__(self, message: str, config_file: str = None, parameter: str = None):
        self.config_file = config_file
        self.parameter = parameter

        if config_file is not None:
            message = f"Configuration error in {config_file}: {message}"
        if parameter is not None:
            message = f"{message} (parameter: {parameter})"

        super().__init__(message)


class InvalidSymbolError(ConfigurationError):
    """Exception raised when a symbol has no IUPAC ambiguity table entry."""

    def __init__(self, symbol: str, position: int = None, context: str = None):
        self.symbol = symbol
        self.position = position
        self.context = context

        message = f"Unknown nucleotide symbol {symbol!r}"
        if position is not None:
            message = f"{message} at position {position + 1}"
        if context is not None:
            message = f"{message} in {context}"

        super().__init__(message)


class InputError(HyperexError):
    """Exception raised while opening or parsing input sequences."""

    def __init__(self, message: str, path: str = None):
        self.path = path

        if path is not None:
            message = f"{path}: {message}"

        super().__init__(message)


class OutputError(HyperexError):
    """Exception raised while writing extracted regions."""

    def __init__(self, message: str, path: str = None):
        self.path = path

        if path is not None:
            message = f"Cannot write {path}: {message}"

        super().__init__(message)
