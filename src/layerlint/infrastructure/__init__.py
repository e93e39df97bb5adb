"""Infrastructure layer — project file discovery and reading.

This layer depends on stdlib only.
It must never import from services, commands, or output.
"""
