# SCHIP8 shell
"""Presentation-side loop, capability interfaces and session wiring."""
