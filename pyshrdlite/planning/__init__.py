""" Task planning utilities.

This module contains tools to interpret parsed commands as goal formulas,
model the states and actions of the arm, and search for a plan that puts
the world into a state satisfying a goal.
"""
