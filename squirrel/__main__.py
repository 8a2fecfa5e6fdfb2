import sys

from squirrel.cli import main

sys.exit(main())
