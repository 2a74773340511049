from __future__ import annotations

from volchart.core.orchestration.app import main

raise SystemExit(main())
