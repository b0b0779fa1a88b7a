"""Web services wrapping the quote engine."""
