"""
DevBlog - post authoring with a PostgreSQL record store kept in sync with
an Elasticsearch search index.
"""

__version__ = "1.0.0"
