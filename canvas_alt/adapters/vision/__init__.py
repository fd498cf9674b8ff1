"""Vision provider adapters. Importing them requires the ``llm`` extra."""
