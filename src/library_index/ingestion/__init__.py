"""
Ingestion — book parsing, paragraph loading, and the corpus run.

This package turns Project Gutenberg-style text files into paragraph
documents and writes them, in bounded batches, to the search store.
"""
