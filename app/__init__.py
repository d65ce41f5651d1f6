"""
Host-facing layer: configuration, Qt adapter and the demo entry point.
"""
