import sys

from mgrs2latlong.cli import main

if __name__ == "__main__":
    sys.exit(main())
