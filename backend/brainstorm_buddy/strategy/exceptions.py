class GenerationError(Exception):
    """Raised when the model call fails or its output can't be used."""
