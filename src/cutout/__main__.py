import sys

from cutout.cli import main

sys.exit(main())
