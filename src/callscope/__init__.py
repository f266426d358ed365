"""callscope - interactive selection and highlighting for call graphs."""

__version__ = "0.1.0"
