"""
Swarm Thing - a self-extending agent runtime.

This package provides:
- A script runtime that compiles Python tool sources into one merged program
- Native capabilities callable from tool scripts (files, web, messaging, cloning)
- An approval queue for tools shared by peer agents over HTTP
- A heuristic safety classifier for incoming tool code
"""

__version__ = "0.3.0"
