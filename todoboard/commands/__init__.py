"""
Subcommands of the ``todoboard`` entry point.
"""
