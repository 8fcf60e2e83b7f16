"""Second sample package reusing model class names from sample_app."""
