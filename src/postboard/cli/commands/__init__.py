"""Commands registered on the postboard CLI app."""
