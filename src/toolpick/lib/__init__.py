"""Selection, caching and ranking building blocks."""
