"""Entry point for ``python -m stool``."""

from stool.cli import main

if __name__ == "__main__":
    main()
