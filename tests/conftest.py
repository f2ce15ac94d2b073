"""
Pytest configuration for ensuring the project root is on sys.path.

This lets test modules import the in-repo packages (``radix`` and
``modules``) without installing the project first.
"""

import os
import sys

REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)
