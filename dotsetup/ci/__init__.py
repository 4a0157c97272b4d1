"""CI integration (GitHub Actions)."""

from .github import ExportError, GitHubExporter, format_key_value

__all__ = ["ExportError", "GitHubExporter", "format_key_value"]
