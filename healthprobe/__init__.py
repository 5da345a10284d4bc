"""Health probe building blocks: text checks, host metric parsing, HTTP trace timing and client data specifications."""

__version__ = "0.1.0"