"""kctx - pick and activate kubectl contexts from the terminal"""

__version__ = "0.3.0"
