"""Domain model, scoring contract and session store."""
