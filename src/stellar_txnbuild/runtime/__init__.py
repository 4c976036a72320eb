"""
Runtime support shared by every layer of the transaction builder.
"""

from .errors import *
