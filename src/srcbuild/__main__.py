"""Allow ``python -m srcbuild``."""

from srcbuild_cli.cli import main

if __name__ == "__main__":
    main()
