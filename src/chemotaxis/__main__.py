import sys

from chemotaxis.cli import main

sys.exit(main())
