"""Domain layer — canonical paths, layer classification, and the boundary policy.

This layer depends only on the stdlib. Every function here is pure:
identical inputs always yield identical outputs.
It must never import from services, infrastructure, commands, or config.
"""
