"""Stages modified mark files of a git working copy, never committing or pushing."""

__version__ = "0.3.0"
