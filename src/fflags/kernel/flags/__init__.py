"""Kernel flags – record types and value equality."""
from fflags.kernel.flags.equality import values_equal
from fflags.kernel.flags.record import FlagKind, FlagRecord, FlagValue

__all__ = ["FlagKind", "FlagRecord", "FlagValue", "values_equal"]
