"""Allow ``python -m diffexpr``."""

from .cli import main

if __name__ == "__main__":
    raise SystemExit(main())
