"""Entry point for ``python -m hexworld``."""

from .cli import main

raise SystemExit(main())
