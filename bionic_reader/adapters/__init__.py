from . import io_epub, io_html

__all__ = ["io_epub", "io_html"]
