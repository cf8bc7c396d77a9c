"""Runtime experiments for the block flattener."""
