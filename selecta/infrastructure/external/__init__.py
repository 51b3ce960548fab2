"""External integrations: upload storage."""
