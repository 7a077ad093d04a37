"""
Main entry point for the site_archiver package.

Allows running the archiver as: python -m site_archiver
"""

from site_archiver.cli import main

if __name__ == "__main__":
    main()
