import sys

from pyhouseholder.cli import main

sys.exit(main())
