from .contracts import DEFAULT_INSTRUCTION, AltTextGeneratorPort

__all__ = ["AltTextGeneratorPort", "DEFAULT_INSTRUCTION"]
