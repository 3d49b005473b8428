"""mix-tool commands.

Every module in this package that defines a `command` object is
auto-registered by mix_checker.registry.discover(). The module docstring
is the command's `mix-tool help <command>` text.
"""
