"""storefront-qa CLI - Command line interface for storefront-qa."""

from storefront_qa.cli.commands import build_pytest_args, cli, setup_logging


def main() -> None:
    """Main entry point for the storefront-qa CLI."""
    cli()


__all__ = ["build_pytest_args", "cli", "main", "setup_logging"]
