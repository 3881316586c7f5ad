"""
Core components of the Git Playground simulator.

This module contains the command parser, the command interpreter, the
repository factories and the graph projection used by visualizers.
"""

from .command_interpreter import CommandInterpreter
from .command_parser import parse_command
from .graph_projector import project_graph
from .repository_factory import (
    create_cloned_state,
    create_initial_state,
    create_sample_state,
)

__all__ = [
    "CommandInterpreter",
    "parse_command",
    "project_graph",
    "create_cloned_state",
    "create_initial_state",
    "create_sample_state",
]
