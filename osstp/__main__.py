"""Allow ``python -m osstp``."""

from osstp.cli import main

if __name__ == "__main__":
    main()
