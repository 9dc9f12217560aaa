import sys

from vars_lib.cli import main

sys.exit(main())
