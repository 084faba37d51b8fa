"""Allow running the CLI with `python -m folder2csv`."""

from folder2csv.cli import app

if __name__ == "__main__":
    app()
