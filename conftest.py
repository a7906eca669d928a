from __future__ import annotations

import os

# Qt widgets in the test suite run without a display.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
