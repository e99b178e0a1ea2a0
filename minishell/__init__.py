"""An interactive command shell with pipes, redirections, variable expansion and builtins."""

__version__ = "0.1.0"