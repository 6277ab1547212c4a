"""Allow ``python -m kep``."""

from kep.app import main

if __name__ == "__main__":
    main()
