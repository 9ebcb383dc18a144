"""Export module — HTML article content to Markdown / plain text."""

from blogstudio.export.markdown import html_to_markdown, html_to_text, export_filename

__all__ = ["html_to_markdown", "html_to_text", "export_filename"]
