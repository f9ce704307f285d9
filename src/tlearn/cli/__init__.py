"""
CLI module for the t-learn shell.

Provides the interpreter and the interactive front-ends.
"""

from tlearn.cli.interpreter import DisplayHistory, Interpreter

__all__ = [
    "DisplayHistory",
    "Interpreter",
]
