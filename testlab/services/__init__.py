"""
Data-fetch contracts, one service per component.

Services talk to the hosted backend and raise domain errors; turning those
into user-facing messages is left to the views.
"""
