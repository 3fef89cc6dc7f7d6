"""MessMate package.

This package is organized by feature modules (users, menu, attendance, billing, ...)
with a thin Flask controller layer and service/repository layers.
"""
