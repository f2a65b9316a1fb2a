"""
Best practice rules for JavaScript and TypeScript.

Rules in this module:
- BEST_PRACTICES.ACCESSOR_PAIRS - Detects setters without getters (and
  optionally getters without setters)
"""
