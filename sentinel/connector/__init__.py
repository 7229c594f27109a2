"""Steam collaborators and Steam Guard codes."""
