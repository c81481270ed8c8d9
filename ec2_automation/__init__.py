"""List, start or stop EC2 instances selected by tag."""

__version__ = "0.1.0"
