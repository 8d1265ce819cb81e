"""Region projection, color derivation and rendering."""
