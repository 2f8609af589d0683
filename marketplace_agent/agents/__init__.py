"""Command routing and response building."""

from .command_agent import CommandAgent

__all__ = ['CommandAgent']
