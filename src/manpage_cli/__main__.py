"""Allow ``python -m manpage_cli``."""

from manpage_cli.main import main

if __name__ == "__main__":
    main()
