"""Custom exceptions for faasctl.

This module defines a hierarchy of custom exceptions for better error
categorization and handling throughout the application.
"""


class FaasctlError(Exception):
    """Base exception for all faasctl errors.

    Parameters
    ----------
    message : str
        Error message describing what went wrong.
    details : dict, optional
        Additional structured information about the error.

    Attributes
    ----------
    message : str
        The error message.
    details : dict
        Dictionary containing additional error context.
    """

    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self):
        """Format error message with optional details.

        Returns
        -------
        str
            Formatted error message.
        """
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


class ConfigError(FaasctlError):
    """Configuration or flag error.

    Raised when:
    - Configuration files are missing or invalid
    - Required flags are missing (e.g. --image in single-function mode)
    - Mutually exclusive flags are combined
    - KEY=VALUE options are malformed
    """

    pass


class StackError(FaasctlError):
    """Stack file loading or filtering error.

    Raised when:
    - The stack file cannot be read or fetched
    - The provider is not supported
    - Both --regex and --filter are given
    - No functions match the given --regex/--filter
    """

    pass


class BuildError(FaasctlError):
    """A function image failed to build or push.

    Parameters
    ----------
    message : str
        Error message describing the failure.
    name : str, optional
        Name of the function being built.

    Attributes
    ----------
    name : str or None
        Function name, if known.
    """

    def __init__(self, message: str, name: str = None):
        super().__init__(message)
        self.name = name


class GatewayError(FaasctlError):
    """Error communicating with the gateway API.

    Parameters
    ----------
    message : str
        Error message describing the API error.
    status_code : int, optional
        HTTP status code from the gateway response.

    Attributes
    ----------
    status_code : int or None
        HTTP status code if available.
    """

    def __init__(self, message: str, status_code: int = None):
        details = {}
        if status_code:
            details["status_code"] = status_code

        super().__init__(message, details)
        self.status_code = status_code


class ResourceNotFoundError(FaasctlError):
    """Requested resource not found on the gateway.

    Raised when:
    - A function to remove does not exist
    - A secret to remove does not exist
    """

    pass
