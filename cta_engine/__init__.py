"""
CTA Engine

Configuration, editing and rendering of call-to-action (CTA) screens.
"""

__version__ = "1.0.0"
