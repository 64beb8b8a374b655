import sys

from braceml.cli import main

sys.exit(main())
