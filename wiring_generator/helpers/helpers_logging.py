"""Simple logging helpers for the wiring generator CLI."""

from wiring_generator.core.models import MergeStatus


class Colors:
    """ANSI color codes for terminal output."""
    HEADER = '\033[95m'
    CYAN = '\033[96m'
    GREEN = '\033[92m'
    YELLOW = '\033[93m'
    RED = '\033[91m'
    RESET = '\033[0m'
    BOLD = '\033[1m'
    DIM = '\033[2m'


_STATUS_COLORS: dict[MergeStatus, str] = {
    MergeStatus.CREATED: Colors.GREEN,
    MergeStatus.UPDATED: Colors.CYAN,
    MergeStatus.UNCHANGED: Colors.DIM,
    MergeStatus.SKIPPED: Colors.YELLOW,
}


def print_header(msg: str) -> None:
    """Print a header message."""
    print(f"{Colors.HEADER}{Colors.BOLD}{msg}{Colors.RESET}")


def print_info(msg: str) -> None:
    """Print an info message."""
    print(f"{Colors.CYAN}{msg}{Colors.RESET}")


def print_success(msg: str) -> None:
    """Print a success message."""
    print(f"{Colors.GREEN}✓ {msg}{Colors.RESET}")


def print_warning(msg: str) -> None:
    """Print a warning message."""
    print(f"{Colors.YELLOW}⚠️  {msg}{Colors.RESET}")


def print_error(msg: str) -> None:
    """Print an error message."""
    print(f"{Colors.RED}❌ {msg}{Colors.RESET}")


def print_status(line: str, status: MergeStatus) -> None:
    """Print an artifact report line colored by its merge status."""
    color = _STATUS_COLORS.get(status, Colors.RESET)
    print(f"{color}- {line}{Colors.RESET}")
