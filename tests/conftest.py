"""
Pytest configuration file

Adds the module directory to the Python path so tests can import modules.
"""
import sys
import os

classes_dir = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "classes")
if classes_dir not in sys.path:
    sys.path.insert(0, classes_dir)
