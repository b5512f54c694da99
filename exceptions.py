"""Exception classes for the RTSP relay."""


class RelayError(Exception):
    """Base exception for RTSP relay errors."""
    pass


class ConfigurationError(RelayError):
    """Exception raised when the runtime configuration cannot be resolved."""
    pass


class MalformedScaleError(ConfigurationError):
    """Exception raised for a scale value without the 'x' separator."""

    def __init__(self, value):
        self.value = value
        super().__init__(
            f"No x token found between width and height in the scale argument: {value}"
        )


class MalformedOptionError(ConfigurationError):
    """Exception raised for an unknown option or an option missing its value."""

    def __init__(self, option, missing_value=False):
        self.option = option
        self.missing_value = missing_value
        if missing_value:
            message = f"Option -{option} requires an argument."
        elif option.isascii() and option.isprintable():
            message = f"Unknown option `-{option}'."
        else:
            message = f"Unknown option character `\\x{ord(option):x}'."
        super().__init__(message)
