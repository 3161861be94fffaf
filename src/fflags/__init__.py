"""
fflags – in-memory feature-flag cache in front of a document store.

Import path convention::

    from fflags.application.flags import FlagsCollection
    from fflags.kernel.flags import FlagKind, FlagRecord
    from fflags.adapters.mongodb import MongoFlagStore
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
