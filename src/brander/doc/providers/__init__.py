"""Built-in document providers."""
