"""Allow ``python -m workflow_runner``."""

import sys

from workflow_runner.cli import main

sys.exit(main())
