import sys

from r_tidy.cli.main import main

if __name__ == "__main__":
    sys.exit(main())
