"""Allow running the CLI with ``python -m weighted_graph``."""

import sys

from weighted_graph.cli import main

sys.exit(main())
