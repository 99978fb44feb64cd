"""Module entrypoint for ``python -m reposync``."""

from reposync.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
