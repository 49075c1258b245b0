"""cgmon commands, one module per command.
"""
