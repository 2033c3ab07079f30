from __future__ import annotations

from .cli.search_report import main

if __name__ == "__main__":
    raise SystemExit(main())
