"""Personal recipe manager: query, share and import recipes."""
