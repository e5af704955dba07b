"""
Version 1 of the admin API.

Every endpoint builds the controller of the matching screen, drives it
with the request parameters and returns the controller's view state.
"""
