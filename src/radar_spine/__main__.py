"""Allow ``python -m radar_spine``."""

from radar_spine.cli import app

if __name__ == "__main__":
    app()
