"""Built-in pixel operations.

Every module in this package that defines an `operation` object is
auto-registered by picture_kit.registry.discover(), under the operation's
own name.
"""
