"""Radcliffe - flat schema inference for JSON documents."""

__version__ = "0.1.0"
