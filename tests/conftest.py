"""
Shared test configuration.
"""

import matplotlib

# Headless backend for drawing tests
matplotlib.use("Agg")
