import sys
from colorama import init, Fore, Style

# Initialize colorama for Windows compatibility
init()


class Colors:
    """Color constants for CLI output."""
    RED = Fore.RED
    GREEN = Fore.GREEN
    YELLOW = Fore.YELLOW
    BLUE = Fore.BLUE
    CYAN = Fore.CYAN
    WHITE = Fore.WHITE

    # Bright colors
    BRIGHT_RED = Fore.LIGHTRED_EX
    BRIGHT_GREEN = Fore.LIGHTGREEN_EX
    BRIGHT_YELLOW = Fore.LIGHTYELLOW_EX
    BRIGHT_BLUE = Fore.LIGHTBLUE_EX
    BRIGHT_MAGENTA = Fore.LIGHTMAGENTA_EX
    BRIGHT_CYAN = Fore.LIGHTCYAN_EX
    BRIGHT_WHITE = Fore.LIGHTWHITE_EX

    # Styles
    BOLD = Style.BRIGHT
    DIM = Style.DIM
    RESET = Style.RESET_ALL


class Icons:
    """ASCII icons for cross-platform compatibility."""
    SUCCESS = "[+]"
    ERROR = "[X]"
    WARNING = "[!]"
    INFO = "[i]"
    GEAR = "[*]"


def _use_color(stream=None) -> bool:
    """Only decorate output going to a terminal."""
    stream = stream or sys.stderr
    return hasattr(stream, 'isatty') and stream.isatty()


def colored(text, color, bold=False):
    """Return colored text, or plain text when stderr is not a terminal."""
    if not _use_color():
        return str(text)
    style = Colors.BOLD if bold else ""
    return f"{style}{color}{text}{Colors.RESET}"


def success(text):
    """Green success message."""
    return colored(f"{Icons.SUCCESS} {text}", Colors.BRIGHT_GREEN, bold=True)


def error(text):
    """Red error message."""
    return colored(f"{Icons.ERROR} {text}", Colors.BRIGHT_RED, bold=True)


def warning(text):
    """Yellow warning message."""
    return colored(f"{Icons.WARNING} {text}", Colors.BRIGHT_YELLOW, bold=True)


def info(text):
    """Blue info message."""
    return colored(f"{Icons.INFO} {text}", Colors.BRIGHT_BLUE)


def create_section_header(title):
    """Create a section header."""
    return colored(f"\n> {title}", Colors.BRIGHT_YELLOW, bold=True)


def format_stat(label, value, unit=""):
    """Format a statistic line."""
    label_colored = colored(f"  - {label}:", Colors.WHITE)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        value = f"{value:,}"
    value_colored = colored(f"{value}{unit}", Colors.BRIGHT_GREEN, bold=True)
    return f"{label_colored} {value_colored}"


def format_config(label, value):
    """Format a configuration line."""
    label_colored = colored(f"{Icons.GEAR} {label}:", Colors.CYAN)
    value_colored = colored(str(value), Colors.BRIGHT_CYAN)
    return f"{label_colored} {value_colored}"
