"""
Moodiary emotion analysis pipeline.

Strategies that score mood journal entries (rule-based and LLM-backed),
plus the tag, search and statistics utilities that consume their results.
"""

__version__ = "0.3.0"
