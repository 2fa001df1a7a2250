"""Pydantic schemas shared by the store, controller and routes."""
