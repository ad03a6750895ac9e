from .cli import main_cli, run

__all__ = ["main_cli", "run"]
