"""Pretty output and formatting utilities for faasctl CLI."""

import sys
import threading


# Global color state
_color_enabled = None  # None = auto-detect, True = force on, False = force off

# Worker threads share stdout
_write_lock = threading.Lock()


def set_color_enabled(enabled: bool) -> None:
    """
    Set global color output preference.

    Parameters
    ----------
    enabled : bool
        True to enable colors, False to disable.
    """
    global _color_enabled
    _color_enabled = enabled


# ANSI color codes
class Colors:
    """
    ANSI color codes for terminal output.

    Provides constants for text formatting and colorization in terminals
    that support ANSI escape sequences.
    """

    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    # Foreground colors
    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    CYAN = "\033[36m"


def supports_color() -> bool:
    """
    Check if the terminal supports color output.

    Returns
    -------
    bool
        True if stdout is a TTY and platform is not Windows.
    """
    global _color_enabled

    # If explicitly set, use that
    if _color_enabled is not None:
        return _color_enabled

    return sys.stdout.isatty() and not sys.platform.startswith("win")


def colorize(text: str, color: str) -> str:
    """
    Colorize text if terminal supports it.

    Parameters
    ----------
    text : str
        Text to colorize.
    color : str
        ANSI color code from the Colors class.

    Returns
    -------
    str
        Colorized text if supported, plain text otherwise.
    """
    if supports_color():
        return f"{color}{text}{Colors.RESET}"
    return text


def _write_line(line: str, stream=None) -> None:
    """Write a full line in one call so concurrent workers never split it."""
    stream = stream or sys.stdout
    with _write_lock:
        stream.write(f"{line}\n")
        stream.flush()


def success(message: str) -> None:
    """
    Print success message with green checkmark.

    Parameters
    ----------
    message : str
        Success message to display.
    """
    symbol = colorize("✓", Colors.GREEN)
    _write_line(f"{symbol} {message}")


def error(message: str) -> None:
    """
    Print error message with red X symbol to stderr.

    Parameters
    ----------
    message : str
        Error message to display.
    """
    symbol = colorize("✗", Colors.RED)
    _write_line(f"{symbol} {message}", sys.stderr)


def warning(message: str) -> None:
    """
    Print warning message with yellow warning symbol.

    Parameters
    ----------
    message : str
        Warning message to display.
    """
    symbol = colorize("⚠", Colors.YELLOW)
    _write_line(f"{symbol} {message}")


def info(message: str) -> None:
    """
    Print informational message with indentation.

    Parameters
    ----------
    message : str
        Informational message to display.
    """
    _write_line(f"  {message}")


def plain(message: str) -> None:
    """Print a message as-is."""
    _write_line(message)


def progress(worker: int, message: str) -> None:
    """
    Print a build progress line attributed to a worker.

    Parameters
    ----------
    worker : int
        Index of the worker emitting the line.
    message : str
        Progress message, e.g. "> Building fn-a."
    """
    _write_line(colorize(f"[{worker}] {message}", Colors.YELLOW))


def header(message: str) -> None:
    """
    Print header message in bold.

    Parameters
    ----------
    message : str
        Header message to display.
    """
    text = colorize(message, Colors.BOLD)
    _write_line(f"\n{text}")
