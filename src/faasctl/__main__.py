"""Allow ``python -m faasctl``."""

import sys

from faasctl.cli import main

sys.exit(main())
