"""Console script entrypoint for the wsclient CLI."""

from .cli import main

if __name__ == "__main__":
    raise SystemExit(main())
