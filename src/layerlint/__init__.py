"""layerlint — layered-architecture import boundaries for front-end codebases."""

__version__ = "0.4.0"
