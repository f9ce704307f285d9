"""
Built-in commands package.

Commands are grouped in subdirectories, each containing an __init__.py that
registers its commands using @command_registry.register().
"""
