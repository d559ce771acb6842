"""Main entry point when executing geocli as a package.

This allows running the package using python -m geocli.
"""

from geocli.main import cli_entry_point

if __name__ == "__main__":
    cli_entry_point()
