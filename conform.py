#!python3 -X utf8

import sys

from conform.cli import main

if __name__ == '__main__':
    sys.exit(main())
