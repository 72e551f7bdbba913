#!/usr/bin/env python3
"""Weekly classification run: metrics -> buckets -> queued actions -> snapshot."""
from __future__ import annotations

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from contentperf.cli import analyze_main


if __name__ == "__main__":
    sys.exit(analyze_main())
