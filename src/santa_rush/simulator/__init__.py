"""Desktop window and input for Santa Rush."""
