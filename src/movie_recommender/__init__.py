"""Guarded Movie Recommender.

Recommends family-friendly movies from natural-language preferences,
screening every input and reference movie with an LLM content-safety
classifier and enriching the catalog with scraped IMDb metadata.
"""

__version__ = "0.1.0"
