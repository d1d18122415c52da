"""Conversational loop: chat backend, agent history and the text protocol."""
