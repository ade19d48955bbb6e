"""Services subpackage - catalog views."""
