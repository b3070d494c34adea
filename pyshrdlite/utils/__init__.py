""" General utilities.

This module contains general utilities used throughout pyshrdlite,
such as generic graph search, logging, and locating bundled data.
"""
