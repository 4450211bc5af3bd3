"""Core value types shared across components."""
