"""Bloggo static site generator.

Bloggo merges posts (YAML front matter plus a Markdown or HTML body) into
Jinja2 templates and writes a deployable site: one page per post, an index
over all posts, an index and Atom feed per tag, and a site-wide Atom feed.

The main entry point is the CLI module, which provides the build and clean
commands. Library users build a SiteConfig and call ``Site(config).build()``.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
