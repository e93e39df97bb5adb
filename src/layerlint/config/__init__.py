"""Configuration layer — section models, settings merging, discovery, logging."""
