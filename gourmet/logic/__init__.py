"""Core business logic layer.

Subpackages:
- shopping: ingredient normalization, shopping list consolidation and sharing
- scraping: recipe page extraction, ingredient line parsing, batch import
- planning: calendar week calculations for the weekly planner
- catalog: dish search, filters and sorting
- reporting: cooking statistics
"""
__all__ = ["shopping", "scraping", "planning", "catalog", "reporting"]
