"""pdfchat: upload PDFs, index their chunks, and chat with them."""

__version__ = "0.1.0"
