"""Allow ``python -m politeguard``."""

from politeguard.cli import main

raise SystemExit(main())
