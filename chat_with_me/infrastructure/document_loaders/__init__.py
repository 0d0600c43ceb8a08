"""Document loader implementations."""
from .text_loader import MarkdownLoader

__all__ = ["MarkdownLoader"]
