"""A grid-based falling-sand simulation of configurable materials, with a pygame front end."""

__version__ = "0.1.0"