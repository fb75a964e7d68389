# SPDX-FileCopyrightText: 2025 shamir-consensus contributors
# SPDX-License-Identifier: MIT
#
# conftest.py — test environment:
#   • src/ on sys.path so the package imports without installation
#   • progress bars off for every run started from the tests

from __future__ import annotations

import os
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent
SRC = ROOT / "src"
if SRC.is_dir():
    sys.path.insert(0, str(SRC))

os.environ.setdefault("SHAMIR_PROGRESS", "0")
