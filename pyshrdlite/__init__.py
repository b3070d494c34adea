""" Natural language controlled robot arm planner for block worlds. """
