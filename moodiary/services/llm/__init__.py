"""Remote language-model access: prompts, response validation, providers."""
