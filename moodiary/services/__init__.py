"""Application services: analysis strategies, LLM access, tags, search, statistics."""
