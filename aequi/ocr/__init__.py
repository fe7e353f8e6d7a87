"""Receipt intake: content hashing, attachment layout and image preprocessing."""

__all__ = ["digest", "preprocess"]