"""ORM models for the songbook store."""
