"""stribor: git-backed bookmarks, one YAML file per bookmark."""

__version__ = "0.1.0"
