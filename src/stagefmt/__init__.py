"""stagefmt — run a formatter over staged git content."""

__version__ = "0.1.0"
