"""CLI layer — commands, terminal output, and the error boundary.

Only this package renders to the terminal or prompts the user.  It wires
``infra`` adapters into ``core`` services; nothing outside ``cli``
imports from it.
"""
