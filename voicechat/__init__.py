"""Voice Chat Relay - browser chat/voice assistant backed by cloud AI APIs."""

__version__ = "1.0.0"
