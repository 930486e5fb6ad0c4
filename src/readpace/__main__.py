"""Main entry point for the readpace package."""

from readpace.cli import app


def main():
    """Run the command-line interface."""
    app()


if __name__ == "__main__":
    main()
