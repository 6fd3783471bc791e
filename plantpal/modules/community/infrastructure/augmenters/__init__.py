from .null_augmenter import NullSearchAugmenter
from .openai_augmenter import OpenAISearchAugmenter

__all__ = ["NullSearchAugmenter", "OpenAISearchAugmenter"]
