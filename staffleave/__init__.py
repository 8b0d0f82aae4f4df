"""
Staff Leave engine.

Eligibility rules and request workflow for a healthcare unit's time-off
and shift-coverage requests.
"""

__version__ = "1.0.0"
