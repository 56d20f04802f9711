"""Console tracker for DIY projects, their materials, steps and categories."""

__version__ = "0.1.0"
