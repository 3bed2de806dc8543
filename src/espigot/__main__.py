import sys

from espigot.cli import main

sys.exit(main())
