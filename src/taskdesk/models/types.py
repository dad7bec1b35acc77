# taskdesk type definitions
# Rev 0.1.0

from __future__ import annotations
from typing import Callable, Literal

# Task variants as they appear in reports
TaskKind = Literal["BASIC", "RECURRING"]

# Change observers take no payload; they re-read the snapshot
Observer = Callable[[], None]

# Runs a zero-argument callable on the UI thread
Dispatcher = Callable[[Callable[[], None]], None]
