"""HTTP relay exposing MessageService over FastAPI."""
