import sys

from .analyzer import main

if __name__ == "__main__":
    sys.exit(main())
