"""Entry point for `python -m hash_cli` and `hashdiff` console script."""

from __future__ import annotations

from hash_cli.app import app


def main() -> None:
    app()


if __name__ == "__main__":
    main()
