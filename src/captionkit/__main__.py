import contextlib
import sys

from .cli import main_cli


def main() -> None:
    """Entry point for the captionkit CLI application."""
    exit_code = 1
    with contextlib.suppress(KeyboardInterrupt):
        exit_code = main_cli()
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
