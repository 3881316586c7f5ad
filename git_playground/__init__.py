"""
Git Playground

An in-memory simulator of a local Git repository's object and reference
model. Typed ``git`` command lines are validated and executed against
immutable repository snapshots, so learners can experiment with Git
without touching a real file system or network.
"""

__version__ = "0.1.0"
__author__ = "Git Playground Team"
