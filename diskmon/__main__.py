import sys

from diskmon.cli import main

if __name__ == "__main__":
    sys.exit(main())
