"""
LOOK.IN flatmate marketplace backend
"""

__version__ = "1.0.0"
__license__ = "MIT"
