from __future__ import annotations

from talentsync.ui.cli import run

run()
