"""Browser-side scripts."""
