"""
Package entry point.

Allows running the application via:

    python -m tardybook

This simply forwards execution to tardybook.cli.main().
"""

from tardybook.cli import main

if __name__ == "__main__":
    main()
