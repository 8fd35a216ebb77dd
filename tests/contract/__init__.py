"""Checks shared by every implementation of a port.

Fixtures here are parametrized over the implementations; tests only use the
port's public methods.
"""
