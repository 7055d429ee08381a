"""
chaincheck

Flags except blocks that raise a new exception without chaining the
exception they caught.
"""
__version__ = "0.1.0"
