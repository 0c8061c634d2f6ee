"""Package of content types split across modules."""
