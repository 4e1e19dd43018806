from twmap.naming.generator import ClassNameGenerator, GenerationMode

__all__ = ["ClassNameGenerator", "GenerationMode"]
