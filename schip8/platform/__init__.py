# SCHIP8 pygame platform
"""pygame implementations of the window, audio and input capabilities."""
