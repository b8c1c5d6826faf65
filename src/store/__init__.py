"""Destination storage layer.

This module holds the storage sink contract and its implementations.
It also persists which export version is currently installed.
"""
