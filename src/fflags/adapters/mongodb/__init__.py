"""MongoDB adapter — flag store over motor.

Requires the ``mongodb`` extra::

    pip install "fflags-cache[mongodb]"
"""

from fflags.adapters.mongodb.store import MongoFlagStore

__all__ = ["MongoFlagStore"]
