"""Control software building blocks for the pod."""

__version__ = "0.1.0"