"""Output helpers for CLI commands.

user_output and machine_output live in tabnest.core.output so core
integrations can print without importing the CLI layer.
"""

from tabnest.core.output import machine_output, user_output

__all__ = ["machine_output", "user_output"]
