"""
Root conftest.py for envconfig.

Puts the project root on sys.path so the tests import the working tree
without an install.
"""

import os
import sys

project_root = os.path.dirname(os.path.abspath(__file__))
if project_root not in sys.path:
    sys.path.insert(0, project_root)
