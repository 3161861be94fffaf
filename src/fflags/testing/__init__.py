"""Testing helpers – in-memory store and a manually driven timer."""
