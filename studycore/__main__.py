"""
Package entry point.

Allows running the application via:

    python -m studycore

This simply forwards execution to studycore.cli.main().
"""

from studycore.cli import main

if __name__ == "__main__":
    main()
