"""
Package entry point.

Allows running the application via:

    python -m myroutine

This simply forwards execution to myroutine.cli.main().
"""

from myroutine.cli import main

if __name__ == "__main__":
    main()
