"""Entry point for 'python -m mimsy' command."""

from mimsy.cli import main

if __name__ == "__main__":
    main()
