"""
Application layer.

Services that turn pipeline runs into flat, caller-facing results.
"""
