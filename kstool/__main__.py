"""Allow ``python -m kstool``."""

from kstool.main import app

if __name__ == "__main__":
    app()
