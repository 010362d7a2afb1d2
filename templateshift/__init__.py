"""Templateshift: template migration and compatibility engine.

Lets a portfolio switch visual templates without losing authored content.
"""

__version__ = "0.1.0"
