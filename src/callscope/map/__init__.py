"""Call graph map: interactive terminal UI for selection and highlighting.

A Textual-powered TUI that lists a graph's files and symbols. Selecting one
shows what stays visible, what fades, and which edges are incoming or
outgoing.

Usage:
    callscope map graph.json     # Launch the interactive map
"""
