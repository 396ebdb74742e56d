"""
Companion for the BADSHA-WAZIR-CHOR-SIPAHI party game.
"""

__version__ = "0.1.0"
