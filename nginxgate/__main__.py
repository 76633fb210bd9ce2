"""Allow ``python -m nginxgate``."""

from nginxgate.cli import main

if __name__ == "__main__":
    main()
