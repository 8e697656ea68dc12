"""Database of builtin and struct type layouts, with YAML type files."""

__version__ = "0.1.0"
__all__ = ["typedb", "typeio"]