"""accessor-lint: flags JavaScript property accessors missing their counterpart."""

__version__ = "0.1.0"
