"""
chatterm: an interactive terminal chat client for OpenAI-compatible completion services.

This package follows Parnas's information hiding principles,
where each module hides a specific design decision.
"""

__version__ = "0.1.0"

from .chat import Message, Role

__all__ = ["Message", "Role"]
