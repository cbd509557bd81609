"""Business operations returning Success/Failure results."""
