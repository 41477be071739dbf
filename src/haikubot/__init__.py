"""Haiku bot command protocol package."""
