"""Allow `python -m shellcomp`."""

from .cli import main

if __name__ == "__main__":
    main()
