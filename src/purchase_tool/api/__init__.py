"""API subpackage - FastAPI app exposing catalog lookup and quoting."""
