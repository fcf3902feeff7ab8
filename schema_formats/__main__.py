"""Module entrypoint for `python -m schema_formats`.

Delegates to the CLI implementation.
"""

from .cli import main


if __name__ == "__main__":
    main()
