"""
Main entry point for the rsqlcmd application.
"""
from rsqlcmd.cli.commands import cli


def main():
    """Run the command-line interface."""
    cli()


if __name__ == "__main__":
    main()
