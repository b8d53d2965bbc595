"""Tailless: Moments curated into Spaces, with AI-assisted writing."""

__version__ = "0.1.0"
