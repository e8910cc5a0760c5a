"""Base abstractions shared by the model and chain layers."""
