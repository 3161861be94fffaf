"""Application layer – flag cache engine and refresh scheduling."""
