"""Search backend layer — Pluggable search index clients.

Built-in backends, in priority order:
  - meilisearch: MeiliSearch (hosted, typo-tolerant full-text index)
  - sqlite: substring search straight against the bookmark store

Implement ``SearchIndexClient`` and a ``PluginProvider`` to add your own.
"""
