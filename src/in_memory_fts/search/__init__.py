"""In-memory full-text search package.

- models: Keyword and SearchResult value objects
- analyzers: Tokenizer and filters turning text into keywords
- protocol: Interface shared by index implementations
- memory_index: Forward/inverted index engine
- factory: Settings-aware index construction
"""
