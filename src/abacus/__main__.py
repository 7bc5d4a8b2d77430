"""Allow running abacus as ``python -m abacus``."""

from abacus.cli import main

if __name__ == "__main__":
    main()
