"""
Core utilities shared by every Daybook component: exceptions, logging,
validators, paths and configuration constants.
"""
