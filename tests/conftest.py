"""Pytest configuration to make the repository root importable.

The toolkit ships flat top-level modules, so tests import them directly
(``import orf_scanner``) whether or not the project is installed.
"""

import os
import sys

PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)
