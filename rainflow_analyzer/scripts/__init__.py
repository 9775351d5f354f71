"""Command-line tooling.

Kept out of the analysis path: nothing in ``analysis`` or ``models`` imports from here.
"""
