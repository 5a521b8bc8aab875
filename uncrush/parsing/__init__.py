from .context import ParsingContext
