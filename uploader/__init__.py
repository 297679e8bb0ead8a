"""Upload materializer package initializer.

Turns one multipart request into a validated record that references a stored
file. The package re-exports nothing.
"""
