import sys

from cdok.cli import main

sys.exit(main())
