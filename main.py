import sys

from quillview.app import main

if __name__ == '__main__':
    sys.exit(main())
