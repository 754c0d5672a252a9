"""Profile visibility and photo disclosure rules."""
