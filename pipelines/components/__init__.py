"""KFP v2 components — each file exports one @dsl.component."""

from pipelines.components.index_corpus import index_corpus

__all__ = [
    "index_corpus",
]
